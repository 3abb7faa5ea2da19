"""Database models for the score ledger."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index
from sqlmodel import Field as ORMField, SQLModel


class ScoreRow(SQLModel, table=True):
    """Best score held by one participant."""

    __tablename__ = "score_entry"
    __table_args__ = (
        Index("ix_score_entry_order", "best_score", "submitted_at"),
    )

    participant_id: str = ORMField(primary_key=True, max_length=64)
    best_score: int = ORMField(sa_type=BigInteger)
    submitted_at: datetime = ORMField(sa_type=DateTime(timezone=True), index=True)


class LedgerStateRow(SQLModel, table=True):
    """Singleton row carrying the player counter and the pause flag."""

    __tablename__ = "ledger_state"

    id: int = ORMField(default=1, primary_key=True)
    total_players: int = 0
    paused: bool = False


__all__ = ["LedgerStateRow", "ScoreRow"]
