"""Persistence adapters the score ledger is written against."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from bisect import bisect_left, insort
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from .errors import ParticipantExists
from .types import ScoreEntry


class PersistenceAdapter(ABC):
    """Storage contract: point access by participant plus an ordered read path.

    Ordering everywhere is ``ScoreEntry.order_key``: best score descending,
    earliest ``submitted_at`` first, then participant id.
    """

    @abstractmethod
    def get(self, participant_id: str) -> Optional[ScoreEntry]:
        raise NotImplementedError

    @abstractmethod
    def insert(self, entry: ScoreEntry) -> None:
        """Store a first entry and count the new player in one atomic step.

        Raises :class:`ParticipantExists` if the participant already has a row.
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, entry: ScoreEntry, expected_best: int) -> bool:
        """Replace the stored entry if its best score still equals ``expected_best``."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, participant_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def top(self, limit: int, since: Optional[datetime] = None) -> List[ScoreEntry]:
        raise NotImplementedError

    @abstractmethod
    def count_ahead(self, entry: ScoreEntry) -> int:
        """Number of stored entries ordered strictly before ``entry``."""
        raise NotImplementedError

    @abstractmethod
    def player_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def is_paused(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def set_paused(self, paused: bool) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release held resources."""


OrderKey = Tuple[int, datetime, str]


class MemoryPersistenceAdapter(PersistenceAdapter):
    """Process-local store keeping a sorted projection of order keys."""

    def __init__(self) -> None:
        self._entries: Dict[str, ScoreEntry] = {}
        self._order: List[OrderKey] = []
        self._total_players = 0
        self._paused = False
        self._lock = threading.Lock()

    def get(self, participant_id: str) -> Optional[ScoreEntry]:
        with self._lock:
            return self._entries.get(participant_id)

    def insert(self, entry: ScoreEntry) -> None:
        with self._lock:
            if entry.participant_id in self._entries:
                raise ParticipantExists(entry.participant_id)
            self._entries[entry.participant_id] = entry
            insort(self._order, entry.order_key())
            self._total_players += 1

    def update(self, entry: ScoreEntry, expected_best: int) -> bool:
        with self._lock:
            current = self._entries.get(entry.participant_id)
            if current is None or current.best_score != expected_best:
                return False
            self._remove_key(current.order_key())
            self._entries[entry.participant_id] = entry
            insort(self._order, entry.order_key())
            return True

    def delete(self, participant_id: str) -> bool:
        with self._lock:
            current = self._entries.pop(participant_id, None)
            if current is None:
                return False
            self._remove_key(current.order_key())
            return True

    def top(self, limit: int, since: Optional[datetime] = None) -> List[ScoreEntry]:
        if limit <= 0:
            return []
        with self._lock:
            if since is None:
                keys = self._order[:limit]
            else:
                keys = []
                for key in self._order:
                    if key[1] >= since:
                        keys.append(key)
                        if len(keys) == limit:
                            break
            return [self._entries[key[2]] for key in keys]

    def count_ahead(self, entry: ScoreEntry) -> int:
        with self._lock:
            return bisect_left(self._order, entry.order_key())

    def player_count(self) -> int:
        with self._lock:
            return self._total_players

    def is_paused(self) -> bool:
        with self._lock:
            return self._paused

    def set_paused(self, paused: bool) -> None:
        with self._lock:
            self._paused = bool(paused)

    def _remove_key(self, key: OrderKey) -> None:
        index = bisect_left(self._order, key)
        if index < len(self._order) and self._order[index] == key:
            del self._order[index]


__all__ = ["MemoryPersistenceAdapter", "PersistenceAdapter"]
