"""Structured logging via structlog.

Events go to stderr so they never mix with rendered reports on stdout.
``PRDGRADE_LOG_FORMAT`` picks the renderer; ``auto`` uses the console
renderer in development and JSON everywhere else.
"""

from __future__ import annotations

import logging
import sys

import structlog

from prdgrade.config import Settings, get_settings


def _renderer(settings: Settings) -> structlog.typing.Processor:
    fmt = settings.log_format
    if fmt == "auto":
        fmt = "console" if settings.environment == "development" else "json"
    if fmt == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer(sort_keys=True)


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog for prdgrade."""
    settings = settings or get_settings()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structured logger bound to ``module=name``."""
    if name:
        return structlog.get_logger(module=name)
    return structlog.get_logger()
