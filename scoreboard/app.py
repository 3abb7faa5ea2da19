"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import Settings, configure_logging, init_schema, make_engine, setup_logger
from .ledger import (
    EventHub,
    MemoryPersistenceAdapter,
    PersistenceAdapter,
    RankingIndex,
    ScoreLedger,
    SQLPersistenceAdapter,
    SubmissionGateway,
)

logger = setup_logger(__name__)


def build_adapter(settings: Settings) -> PersistenceAdapter:
    """Construct the persistence adapter selected by ``settings.ledger_backend``."""

    if settings.ledger_backend == "memory":
        return MemoryPersistenceAdapter()
    engine = make_engine(settings.database_url)
    init_schema(engine, reset=settings.db_reset)
    return SQLPersistenceAdapter(engine)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    adapter = build_adapter(settings)
    ledger = ScoreLedger(adapter, max_attempts=settings.submit_max_attempts)
    events = EventHub()
    gateway = SubmissionGateway(ledger, events)
    ranking = RankingIndex(ledger)

    if settings.start_paused and not ledger.is_paused():
        ledger.set_paused(True)
        logger.warning("Starting with submissions paused")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Score ledger ready (%s backend)", settings.ledger_backend)
        yield
        adapter.close()

    app = FastAPI(title="Score Ledger API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.ledger = ledger
    app.state.events = events
    app.state.gateway = gateway
    app.state.ranking = ranking

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("scoreboard.app:create_app", factory=True, host="127.0.0.1", port=3000)
