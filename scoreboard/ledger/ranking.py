"""Ordering queries derived from the ledger's committed state."""

from __future__ import annotations

from typing import List

from .adapters import PersistenceAdapter
from .ledger import ScoreLedger
from .types import LeaderboardWindow, PlayerStats, ScoreEntry


def _rank(store: PersistenceAdapter, participant_id: str) -> int:
    entry = store.get(participant_id)
    if entry is None:
        return 0
    return store.count_ahead(entry) + 1


class RankingIndex:
    """Read-only view over a :class:`ScoreLedger`.

    Holds no copy of its own: each query runs against the adapter while the
    ledger lock is held.
    """

    def __init__(self, ledger: ScoreLedger) -> None:
        self._ledger = ledger

    def rank_of(self, participant_id: str) -> int:
        with self._ledger.locked() as store:
            return _rank(store, participant_id)

    def top_n(
        self, n: int, window: LeaderboardWindow = LeaderboardWindow.ALL_TIME
    ) -> List[ScoreEntry]:
        if n <= 0:
            return []
        span = LeaderboardWindow(window).span
        since = self._ledger.now() - span if span is not None else None
        with self._ledger.locked() as store:
            return store.top(n, since=since)

    def stats_of(self, participant_id: str) -> PlayerStats:
        with self._ledger.locked() as store:
            entry = store.get(participant_id)
            total = store.player_count()
            if entry is None:
                return PlayerStats(best_score=0, rank=0, total_players=total)
            return PlayerStats(
                best_score=entry.best_score,
                rank=store.count_ahead(entry) + 1,
                total_players=total,
            )


__all__ = ["RankingIndex"]
