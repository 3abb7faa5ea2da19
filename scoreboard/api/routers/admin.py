"""Administrative endpoints: the pause gate."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Depends

from ...ledger import Caller, SubmissionGateway
from ..deps import get_caller, get_gateway

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/paused")
def get_paused(gateway: SubmissionGateway = Depends(get_gateway)) -> Dict[str, bool]:
    return {"paused": gateway.is_paused()}


@router.post("/pause")
def pause(
    caller: Caller = Depends(get_caller),
    gateway: SubmissionGateway = Depends(get_gateway),
) -> Dict[str, bool]:
    """Stop accepting submissions until unpaused."""

    gateway.pause(caller)
    return {"paused": gateway.is_paused()}


@router.post("/unpause")
def unpause(
    caller: Caller = Depends(get_caller),
    gateway: SubmissionGateway = Depends(get_gateway),
) -> Dict[str, bool]:
    gateway.unpause(caller)
    return {"paused": gateway.is_paused()}


__all__ = ["router"]
