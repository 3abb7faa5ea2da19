"""Helpers for serialising ledger objects to API payloads."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ..core.time import isoformat_z
from ..ledger.types import PlayerStats, ScoreEntry, SubmitOutcome


def entry_to_dict(entry: ScoreEntry, rank: int) -> Dict[str, Any]:
    return {
        "rank": rank,
        "participant_id": entry.participant_id,
        "score": entry.best_score,
        "submitted_at": isoformat_z(entry.submitted_at),
    }


def entries_to_list(entries: Iterable[ScoreEntry]) -> List[Dict[str, Any]]:
    """Serialise an ordered slice, numbering positions from 1."""

    return [entry_to_dict(entry, position) for position, entry in enumerate(entries, 1)]


def outcome_to_dict(outcome: SubmitOutcome) -> Dict[str, Any]:
    return {
        "ok": True,
        "new_player": outcome.new_player,
        "participant_id": outcome.participant_id,
        "best_score": outcome.best_score,
    }


def stats_to_dict(participant_id: str, stats: PlayerStats) -> Dict[str, Any]:
    return {
        "participant_id": participant_id,
        "best_score": stats.best_score,
        "rank": stats.rank,
        "total_players": stats.total_players,
    }


__all__ = ["entries_to_list", "entry_to_dict", "outcome_to_dict", "stats_to_dict"]
