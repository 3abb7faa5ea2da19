"""Core configuration and infrastructure helpers."""

from .config import BACKENDS, Settings
from .database import init_schema, make_engine
from .logging import configure_logging, setup_logger
from .time import as_utc, isoformat_z, utcnow

__all__ = [
    "BACKENDS",
    "Settings",
    "as_utc",
    "configure_logging",
    "init_schema",
    "isoformat_z",
    "make_engine",
    "setup_logger",
    "utcnow",
]
