"""The score ledger: sole writer of participant best scores."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator

from ..core.logging import setup_logger
from ..core.time import utcnow
from .adapters import PersistenceAdapter
from .errors import InvalidScore, ParticipantExists, ScoreNotImproved, TransactionError
from .types import MAX_SCORE, ScoreEntry, SubmitOutcome

logger = setup_logger(__name__)


class ScoreLedger:
    """Enforces one entry per participant and strictly improving best scores.

    Every mutation and every composed read runs under one re-entrant lock, so
    readers see a submission either fully applied or not at all. Inside the
    lock the adapter's compare-and-swap signals are still honoured, which
    keeps several processes sharing one database honest as well.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        *,
        clock: Callable[[], datetime] = utcnow,
        max_attempts: int = 3,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._adapter = adapter
        self._clock = clock
        self._max_attempts = max_attempts
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[PersistenceAdapter]:
        """Hold the write lock and expose the adapter for a consistent read."""

        with self._lock:
            yield self._adapter

    def now(self) -> datetime:
        return self._clock()

    def submit(self, participant_id: str, score: int) -> SubmitOutcome:
        if score <= 0:
            raise InvalidScore(score)
        if score > MAX_SCORE:
            raise InvalidScore(score, f"Score must not exceed {MAX_SCORE}")

        with self._lock:
            for attempt in range(1, self._max_attempts + 1):
                current = self._adapter.get(participant_id)
                candidate = ScoreEntry(participant_id, score, self._clock())

                if current is None:
                    try:
                        self._adapter.insert(candidate)
                    except ParticipantExists:
                        logger.debug(
                            "Insert raced for %s (attempt %d)", participant_id, attempt
                        )
                        continue
                    logger.info("New player %s scored %d", participant_id, score)
                    return SubmitOutcome(participant_id, score, new_player=True)

                if current.best_score >= score:
                    raise ScoreNotImproved(participant_id, score, current.best_score)

                if self._adapter.update(candidate, expected_best=current.best_score):
                    logger.info(
                        "Player %s improved %d -> %d",
                        participant_id,
                        current.best_score,
                        score,
                    )
                    return SubmitOutcome(participant_id, score, new_player=False)

                logger.debug(
                    "Stale best score for %s (attempt %d)", participant_id, attempt
                )

        raise TransactionError("submit", self._max_attempts)

    def best_score_of(self, participant_id: str) -> int:
        with self._lock:
            entry = self._adapter.get(participant_id)
        return entry.best_score if entry else 0

    def player_count(self) -> int:
        with self._lock:
            return self._adapter.player_count()

    def is_paused(self) -> bool:
        with self._lock:
            return self._adapter.is_paused()

    def set_paused(self, paused: bool) -> None:
        with self._lock:
            self._adapter.set_paused(paused)


__all__ = ["ScoreLedger"]
