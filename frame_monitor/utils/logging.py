"""Logging utilities with consistent formatting."""
from __future__ import annotations

import logging
from typing import Optional

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_level(level: Optional[str], default: str = "INFO") -> str:
    """Normalise a level name, falling back to ``default`` for unknown names."""

    if not level:
        return default
    candidate = str(level).strip().upper()
    return candidate if candidate in _LEVELS else default


def configure(level: str = "INFO") -> None:
    numeric_level = getattr(logging, resolve_level(level))
    logging.basicConfig(level=numeric_level, format=_LOG_FORMAT)
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger().setLevel(numeric_level)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    if level:
        configure(level)
    logger = logging.getLogger(name)
    return logger


__all__ = ["configure", "get_logger", "resolve_level"]
