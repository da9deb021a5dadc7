"""Logging utilities for the application.

This module provides a configured structlog logger for consistent logging across the application.
"""

import logging
import sys

import structlog
from structlog.stdlib import BoundLogger

from app.config import settings

_configured = False


def configure_logger(level: str | None = None) -> None:
    """Configure structlog with JSON formatting and other processors.

    Processors, in order:
    - Context variables merging (request-scoped fields bound by middleware)
    - Log level addition
    - Stack info rendering
    - Exception info
    - ISO timestamp format
    - JSON rendering

    Args:
        level: Minimum level name; defaults to ``settings.LOG_LEVEL``.
    """
    global _configured

    log_level = logging.getLevelName((level or settings.LOG_LEVEL).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: The name of the logger, typically __name__

    Returns:
        A configured structlog BoundLogger instance
    """
    if not _configured:
        configure_logger()
    return structlog.get_logger(name)
