"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...core import Settings
from ...ledger import LeaderboardWindow, ScoreLedger
from ..deps import get_ledger, get_settings

router = APIRouter(tags=["system"])


@router.get("/health")
def health(ledger: ScoreLedger = Depends(get_ledger)) -> Dict[str, Any]:
    """Liveness plus whether submissions are currently accepted."""

    return {"ok": True, "accepting_scores": not ledger.is_paused()}


@router.get("/healthz")
def healthz(
    ledger: ScoreLedger = Depends(get_ledger),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    # Touches the store, so a broken database surfaces here as a 500.
    return {
        "ok": True,
        "backend": settings.ledger_backend,
        "paused": ledger.is_paused(),
        "total_players": ledger.player_count(),
    }


@router.get("/config")
def get_config(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Expose frontend configuration values."""

    return {
        "ledger_backend": settings.ledger_backend,
        "top_scores_max_limit": settings.top_scores_max_limit,
        "windows": [window.value for window in LeaderboardWindow],
    }


__all__ = ["router"]
