"""Ranked score ledger: storage adapters, ledger, ranking index and gateway."""

from .adapters import MemoryPersistenceAdapter, PersistenceAdapter
from .errors import (
    InvalidParticipant,
    InvalidScore,
    LedgerError,
    ScoreNotImproved,
    SystemPaused,
    TransactionError,
    Unauthorized,
)
from .events import EventHub
from .gateway import SubmissionGateway
from .ledger import ScoreLedger
from .participants import normalize_participant_id
from .ranking import RankingIndex
from .sql import SQLPersistenceAdapter
from .types import (
    ADMIN,
    ANONYMOUS,
    MAX_SCORE,
    Caller,
    LeaderboardWindow,
    PlayerStats,
    ScoreEntry,
    ScoreSubmitted,
    SubmitOutcome,
)

__all__ = [
    "ADMIN",
    "ANONYMOUS",
    "Caller",
    "EventHub",
    "InvalidParticipant",
    "InvalidScore",
    "LeaderboardWindow",
    "LedgerError",
    "MAX_SCORE",
    "MemoryPersistenceAdapter",
    "PersistenceAdapter",
    "PlayerStats",
    "RankingIndex",
    "SQLPersistenceAdapter",
    "ScoreEntry",
    "ScoreLedger",
    "ScoreNotImproved",
    "ScoreSubmitted",
    "SubmissionGateway",
    "SubmitOutcome",
    "SystemPaused",
    "TransactionError",
    "Unauthorized",
    "normalize_participant_id",
]
