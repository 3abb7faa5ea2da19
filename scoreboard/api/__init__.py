"""API assembly helpers."""

from __future__ import annotations

from typing import Dict, Type

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core import setup_logger
from ..ledger import (
    InvalidParticipant,
    InvalidScore,
    LedgerError,
    ScoreNotImproved,
    SystemPaused,
    TransactionError,
    Unauthorized,
)
from .routers import ALL_ROUTERS

logger = setup_logger(__name__)

ERROR_STATUS: Dict[Type[LedgerError], int] = {
    InvalidScore: 400,
    InvalidParticipant: 400,
    Unauthorized: 403,
    ScoreNotImproved: 409,
    SystemPaused: 503,
    TransactionError: 503,
}


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), 400)
    logger.debug("%s %s -> %d: %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.user_message, "error": exc.kind},
    )


def register_routes(app: FastAPI) -> None:
    """Attach all application routers and the ledger error handler to the given app."""

    app.add_exception_handler(LedgerError, ledger_error_handler)
    for router in ALL_ROUTERS:
        app.include_router(router)


__all__ = ["ERROR_STATUS", "ledger_error_handler", "register_routes"]
