"""Logger setup with consistent formatting."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_ROOT = "scoreboard"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach the console handler to the package logger once and set its level."""

    logger = logging.getLogger(_ROOT)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        logger.addHandler(handler)
    return logger


def setup_logger(name: str) -> logging.Logger:
    """Return a child of the package logger so one handler serves every module."""

    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT}.{name}")


__all__ = ["configure_logging", "setup_logger"]
