"""FastAPI dependencies resolving per-app services and the calling identity."""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ..core import Settings
from ..ledger import ADMIN, ANONYMOUS, Caller, RankingIndex, ScoreLedger, SubmissionGateway

security = HTTPBasic(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_ledger(request: Request) -> ScoreLedger:
    return request.app.state.ledger


def get_gateway(request: Request) -> SubmissionGateway:
    return request.app.state.gateway


def get_ranking(request: Request) -> RankingIndex:
    return request.app.state.ranking


def get_caller(
    credentials: Optional[HTTPBasicCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> Caller:
    """Resolve Basic credentials to an admin caller; anything else is a plain user."""

    if credentials is None:
        return ANONYMOUS
    ok_user = secrets.compare_digest(
        credentials.username.encode(), settings.admin_user.encode()
    )
    ok_pass = secrets.compare_digest(
        credentials.password.encode(), settings.admin_pass.encode()
    )
    if ok_user and ok_pass:
        return ADMIN
    return ANONYMOUS


__all__ = [
    "get_caller",
    "get_gateway",
    "get_ledger",
    "get_ranking",
    "get_settings",
    "security",
]
