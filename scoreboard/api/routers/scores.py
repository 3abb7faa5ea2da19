"""Score submission and leaderboard query endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...core import Settings
from ...ledger import (
    MAX_SCORE,
    InvalidParticipant,
    LeaderboardWindow,
    RankingIndex,
    ScoreLedger,
    SubmissionGateway,
    normalize_participant_id,
)
from ...services.scores import entries_to_list, outcome_to_dict, stats_to_dict
from ..deps import get_gateway, get_ledger, get_ranking, get_settings

router = APIRouter(tags=["scores"])


def _coerce_score(raw: Any) -> int:
    if raw is None:
        raise HTTPException(400, "Score required")
    if isinstance(raw, bool):
        raise HTTPException(400, "Score must be an integer")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise HTTPException(400, "Score must be an integer")
        raw = int(raw)
    if not isinstance(raw, int):
        raise HTTPException(400, "Score must be an integer")
    if raw < 0:
        raise HTTPException(400, "Score must not be negative")
    if raw > MAX_SCORE:
        raise HTTPException(400, f"Score must not exceed {MAX_SCORE}")
    return raw


def _lookup_id(participant_id: str) -> Optional[str]:
    """Canonical id for queries; malformed ids simply have no entry."""

    try:
        return normalize_participant_id(participant_id)
    except InvalidParticipant:
        return None


@router.post("/scores", status_code=201)
def submit_score(
    body: Dict[str, Any], gateway: SubmissionGateway = Depends(get_gateway)
):
    """Submit a score; only strict improvements are kept."""

    score = _coerce_score(body.get("score"))
    outcome = gateway.submit(body.get("participant_id"), score)
    return outcome_to_dict(outcome)


@router.get("/scores/top")
def get_top_scores(
    limit: int = Query(10, ge=0),
    window: LeaderboardWindow = Query(LeaderboardWindow.ALL_TIME),
    ranking: RankingIndex = Depends(get_ranking),
    settings: Settings = Depends(get_settings),
):
    """Highest best scores, descending."""

    entries = ranking.top_n(min(limit, settings.top_scores_max_limit), window)
    return {"window": window.value, "entries": entries_to_list(entries)}


@router.get("/scores/count")
def get_player_count(ledger: ScoreLedger = Depends(get_ledger)) -> Dict[str, int]:
    return {"total_players": ledger.player_count()}


@router.get("/scores/{participant_id}")
def get_best_score(participant_id: str, ledger: ScoreLedger = Depends(get_ledger)):
    normalized = _lookup_id(participant_id)
    best = ledger.best_score_of(normalized) if normalized else 0
    return {"participant_id": normalized or participant_id, "best_score": best}


@router.get("/scores/{participant_id}/rank")
def get_rank(participant_id: str, ranking: RankingIndex = Depends(get_ranking)):
    normalized = _lookup_id(participant_id)
    rank = ranking.rank_of(normalized) if normalized else 0
    return {"participant_id": normalized or participant_id, "rank": rank}


@router.get("/scores/{participant_id}/stats")
def get_stats(
    participant_id: str,
    ranking: RankingIndex = Depends(get_ranking),
    ledger: ScoreLedger = Depends(get_ledger),
):
    """Best score, rank and player count read under one lock."""

    normalized = _lookup_id(participant_id)
    if normalized is None:
        return {
            "participant_id": participant_id,
            "best_score": 0,
            "rank": 0,
            "total_players": ledger.player_count(),
        }
    return stats_to_dict(normalized, ranking.stats_of(normalized))


__all__ = ["router"]
