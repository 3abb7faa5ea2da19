"""
Exceptions raised by the score ledger, each carrying a user-facing message.
"""

from __future__ import annotations

from typing import Optional


class LedgerError(Exception):
    """Base exception for ledger and gateway failures."""

    kind = "LedgerError"

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class InvalidScore(LedgerError):
    """Raised for a zero score or one too large to store."""

    kind = "InvalidScore"

    def __init__(self, score: int, reason: str = "Score must be greater than 0"):
        super().__init__(f"Invalid score {score}: {reason}", reason)
        self.score = score


class ScoreNotImproved(LedgerError):
    """Raised when a submission does not beat the participant's best."""

    kind = "ScoreNotImproved"

    def __init__(self, participant_id: str, score: int, current_best: int):
        super().__init__(
            f"Score {score} for {participant_id} does not beat current best {current_best}",
            f"Score must be higher than your current best ({current_best})",
        )
        self.participant_id = participant_id
        self.score = score
        self.current_best = current_best


class SystemPaused(LedgerError):
    kind = "SystemPaused"

    def __init__(self):
        super().__init__(
            "Submission rejected while the ledger is paused",
            "Score submissions are paused. Please try again later.",
        )


class Unauthorized(LedgerError):
    kind = "Unauthorized"

    def __init__(self, operation: str):
        super().__init__(
            f"Caller is not allowed to {operation}",
            "This action requires administrator access.",
        )
        self.operation = operation


class InvalidParticipant(LedgerError):
    kind = "InvalidParticipant"

    def __init__(self, participant_id: object, reason: str):
        super().__init__(f"Invalid participant id {participant_id!r}: {reason}", reason)


class TransactionError(LedgerError):
    """Raised when optimistic retries are exhausted."""

    kind = "TransactionError"

    def __init__(self, operation: str, attempts: int):
        super().__init__(
            f"Transaction failed for {operation} after {attempts} attempts",
            "Failed to save score. Please try again.",
        )
        self.attempts = attempts


class ParticipantExists(Exception):
    """Adapter signal: an insert raced with another insert for the same id."""

    def __init__(self, participant_id: str):
        super().__init__(participant_id)
        self.participant_id = participant_id


__all__ = [
    "InvalidParticipant",
    "InvalidScore",
    "LedgerError",
    "ParticipantExists",
    "ScoreNotImproved",
    "SystemPaused",
    "TransactionError",
    "Unauthorized",
]
