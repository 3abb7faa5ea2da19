"""Value types passed between the ledger, the ranking index and callers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple

# Largest best score a store must hold (signed 64-bit column).
MAX_SCORE = 2**63 - 1


@dataclass(frozen=True)
class ScoreEntry:
    """One participant's best accepted score."""

    participant_id: str
    best_score: int
    submitted_at: datetime

    def order_key(self) -> Tuple[int, datetime, str]:
        """Sort key: highest score first, then earliest submission, then id."""

        return (-self.best_score, self.submitted_at, self.participant_id)


@dataclass(frozen=True)
class SubmitOutcome:
    """Result of an accepted submission."""

    participant_id: str
    best_score: int
    new_player: bool


@dataclass(frozen=True)
class PlayerStats:
    best_score: int
    rank: int
    total_players: int


@dataclass(frozen=True)
class ScoreSubmitted:
    """Event emitted once per accepted submission."""

    participant_id: str
    new_best_score: int


@dataclass(frozen=True)
class Caller:
    """Identity the transport resolved for the current request."""

    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


ADMIN = Caller(role="admin")
ANONYMOUS = Caller()


class LeaderboardWindow(str, enum.Enum):
    ALL_TIME = "all-time"
    WEEKLY = "weekly"
    DAILY = "daily"

    @property
    def span(self) -> Optional[timedelta]:
        if self is LeaderboardWindow.WEEKLY:
            return timedelta(days=7)
        if self is LeaderboardWindow.DAILY:
            return timedelta(days=1)
        return None


__all__ = [
    "ADMIN",
    "ANONYMOUS",
    "Caller",
    "LeaderboardWindow",
    "MAX_SCORE",
    "PlayerStats",
    "ScoreEntry",
    "ScoreSubmitted",
    "SubmitOutcome",
]
