"""Database model exports."""

from .score import LedgerStateRow, ScoreRow

__all__ = [
    "LedgerStateRow",
    "ScoreRow",
]
