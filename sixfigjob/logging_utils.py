"""Logging utilities configured for structured logging across the project."""

from __future__ import annotations

import logging
import os
from typing import Optional

import structlog


def _level_from_env(default: int) -> int:
    name = os.getenv("LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else default


def setup_logging(level: int = logging.INFO, timestamper: Optional[str] = "iso") -> None:
    """Configure structlog and standard logging for the application.

    Safe to call more than once; only the first call configures anything.
    ``LOG_LEVEL`` in the environment overrides ``level``.
    """

    if getattr(setup_logging, "_configured", False):  # type: ignore[attr-defined]
        return

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True)
        if timestamper == "iso"
        else structlog.processors.TimeStamper(fmt=None, utc=True),
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=_level_from_env(level))

    setup_logging._configured = True  # type: ignore[attr-defined]
