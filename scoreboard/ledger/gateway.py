"""Front door for submissions and administrative transitions."""

from __future__ import annotations

from typing import Optional

from ..core.logging import setup_logger
from .errors import InvalidScore, SystemPaused, Unauthorized
from .events import EventHub
from .ledger import ScoreLedger
from .participants import normalize_participant_id
from .types import MAX_SCORE, Caller, ScoreSubmitted, SubmitOutcome

logger = setup_logger(__name__)


class SubmissionGateway:
    """Validates submissions, applies the pause gate and reports outcomes.

    The pause flag lives in the ledger's store; this class owns who may flip
    it and what a paused ledger refuses.
    """

    def __init__(self, ledger: ScoreLedger, events: Optional[EventHub] = None):
        self._ledger = ledger
        self._events = events or EventHub()

    @property
    def events(self) -> EventHub:
        return self._events

    def submit(self, participant_id: object, score: int) -> SubmitOutcome:
        normalized = normalize_participant_id(participant_id)

        with self._ledger.locked():
            if self._ledger.is_paused():
                logger.debug("Rejected %s: ledger paused", normalized)
                raise SystemPaused()
            if score <= 0:
                logger.debug("Rejected %s: score %d", normalized, score)
                raise InvalidScore(score)
            if score > MAX_SCORE:
                logger.debug("Rejected %s: score %d too large", normalized, score)
                raise InvalidScore(score, f"Score must not exceed {MAX_SCORE}")
            outcome = self._ledger.submit(normalized, score)

        self._events.publish(ScoreSubmitted(outcome.participant_id, outcome.best_score))
        return outcome

    def pause(self, caller: Caller) -> None:
        self._transition(caller, paused=True)

    def unpause(self, caller: Caller) -> None:
        self._transition(caller, paused=False)

    def is_paused(self) -> bool:
        return self._ledger.is_paused()

    def _transition(self, caller: Caller, *, paused: bool) -> None:
        operation = "pause" if paused else "unpause"
        if not caller.is_admin:
            logger.warning("Refused %s for non-admin caller", operation)
            raise Unauthorized(operation)
        self._ledger.set_paused(paused)
        logger.warning("Ledger %s", "paused" if paused else "resumed")


__all__ = ["SubmissionGateway"]
