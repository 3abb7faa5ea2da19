"""SQLModel-backed persistence adapter."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, delete, func, insert, or_, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.logging import setup_logger
from ..core.time import as_utc
from ..models import LedgerStateRow, ScoreRow
from .adapters import PersistenceAdapter
from .errors import ParticipantExists
from .types import ScoreEntry

logger = setup_logger(__name__)

_STATE_ID = 1


def _row_to_entry(row: ScoreRow) -> ScoreEntry:
    return ScoreEntry(
        participant_id=row.participant_id,
        best_score=row.best_score,
        submitted_at=as_utc(row.submitted_at),
    )


class SQLPersistenceAdapter(PersistenceAdapter):
    """Relational store: one ``score_entry`` row per participant.

    Timestamps are bound as aware UTC and normalised back to UTC on read
    (SQLite returns them naive). Writes go through short transactions on
    the engine; the insert and the player counter share one transaction.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._ensure_state()

    def _ensure_state(self) -> None:
        with Session(self._engine) as session:
            if session.get(LedgerStateRow, _STATE_ID) is not None:
                return
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(LedgerStateRow).values(
                        id=_STATE_ID, total_players=0, paused=False
                    )
                )
        except IntegrityError:
            # Another worker created the row first.
            logger.debug("ledger_state row already present")

    def get(self, participant_id: str) -> Optional[ScoreEntry]:
        with Session(self._engine) as session:
            row = session.get(ScoreRow, participant_id)
            return _row_to_entry(row) if row else None

    def insert(self, entry: ScoreEntry) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(ScoreRow).values(
                        participant_id=entry.participant_id,
                        best_score=entry.best_score,
                        submitted_at=as_utc(entry.submitted_at),
                    )
                )
                conn.execute(
                    update(LedgerStateRow)
                    .where(LedgerStateRow.id == _STATE_ID)
                    .values(total_players=LedgerStateRow.total_players + 1)
                )
        except IntegrityError as exc:
            raise ParticipantExists(entry.participant_id) from exc

    def update(self, entry: ScoreEntry, expected_best: int) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(
                update(ScoreRow)
                .where(
                    ScoreRow.participant_id == entry.participant_id,
                    ScoreRow.best_score == expected_best,
                )
                .values(
                    best_score=entry.best_score,
                    submitted_at=as_utc(entry.submitted_at),
                )
            )
            return result.rowcount == 1

    def delete(self, participant_id: str) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(
                delete(ScoreRow).where(ScoreRow.participant_id == participant_id)
            )
            return result.rowcount == 1

    def top(self, limit: int, since: Optional[datetime] = None) -> List[ScoreEntry]:
        if limit <= 0:
            return []
        query = select(ScoreRow)
        if since is not None:
            query = query.where(ScoreRow.submitted_at >= as_utc(since))
        query = query.order_by(
            ScoreRow.best_score.desc(),
            ScoreRow.submitted_at.asc(),
            ScoreRow.participant_id.asc(),
        ).limit(limit)
        with Session(self._engine) as session:
            return [_row_to_entry(row) for row in session.exec(query).all()]

    def count_ahead(self, entry: ScoreEntry) -> int:
        submitted_at = as_utc(entry.submitted_at)
        query = (
            select(func.count())
            .select_from(ScoreRow)
            .where(
                or_(
                    ScoreRow.best_score > entry.best_score,
                    and_(
                        ScoreRow.best_score == entry.best_score,
                        ScoreRow.submitted_at < submitted_at,
                    ),
                    and_(
                        ScoreRow.best_score == entry.best_score,
                        ScoreRow.submitted_at == submitted_at,
                        ScoreRow.participant_id < entry.participant_id,
                    ),
                )
            )
        )
        with Session(self._engine) as session:
            return int(session.exec(query).one())

    def player_count(self) -> int:
        with Session(self._engine) as session:
            state = session.get(LedgerStateRow, _STATE_ID)
            return state.total_players if state else 0

    def is_paused(self) -> bool:
        with Session(self._engine) as session:
            state = session.get(LedgerStateRow, _STATE_ID)
            return bool(state and state.paused)

    def set_paused(self, paused: bool) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                update(LedgerStateRow)
                .where(LedgerStateRow.id == _STATE_ID)
                .values(paused=bool(paused))
            )

    def close(self) -> None:
        self._engine.dispose()


__all__ = ["SQLPersistenceAdapter"]
