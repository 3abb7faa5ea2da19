"""Application settings and environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


_LOCAL_DEV_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

BACKENDS = ("sql", "memory")


@dataclass
class Settings:
    """Runtime configuration handed to :func:`scoreboard.app.create_app`."""

    database_url: str = "sqlite:///data/app.db"
    ledger_backend: str = "sql"
    admin_user: str = "admin"
    admin_pass: str = "changeme"
    allowed_cors_origins: List[str] = field(
        default_factory=lambda: list(_LOCAL_DEV_ORIGINS)
    )
    db_reset: bool = False
    start_paused: bool = False
    top_scores_max_limit: int = 100
    submit_max_attempts: int = 3
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.ledger_backend not in BACKENDS:
            raise RuntimeError(
                f"LEDGER_BACKEND must be one of {', '.join(BACKENDS)}, "
                f"got {self.ledger_backend!r}"
            )
        if self.top_scores_max_limit < 1:
            raise RuntimeError("TOP_SCORES_MAX_LIMIT must be at least 1")
        if self.submit_max_attempts < 1:
            raise RuntimeError("SUBMIT_MAX_ATTEMPTS must be at least 1")

    @classmethod
    def from_env(cls) -> "Settings":
        # FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
        frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
        additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///data/app.db"),
            ledger_backend=os.getenv("LEDGER_BACKEND", "sql").strip().lower(),
            admin_user=os.getenv("ADMIN_USER", "admin"),
            admin_pass=os.getenv("ADMIN_PASS", "changeme"),
            allowed_cors_origins=_unique(
                [*frontend_origins, *additional_origins, *_LOCAL_DEV_ORIGINS]
            ),
            db_reset=_env_bool("DB_RESET", False),
            start_paused=_env_bool("START_PAUSED", False),
            top_scores_max_limit=_env_int("TOP_SCORES_MAX_LIMIT", 100),
            submit_max_attempts=_env_int("SUBMIT_MAX_ATTEMPTS", 3),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        )


__all__ = ["BACKENDS", "Settings"]
