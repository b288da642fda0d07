"""Structured logging for the expense tracker.

Events are emitted as key/value pairs through ``structlog``.  The
configuration is applied once per process; Streamlit reruns the page
script on every interaction, so repeated calls are no-ops.
"""

from __future__ import annotations

import logging
from typing import Optional

import structlog

from . import config

_CONFIGURED = False


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog with a level filter and console rendering."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    level_name = (level or config.LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    _CONFIGURED = True


def get_logger(name: str):
    """Return a bound logger tagged with the module name."""
    return structlog.get_logger(module=name)
