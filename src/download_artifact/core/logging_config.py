"""
download_artifact.core.logging_config - structlog Setup
=========================================================

Every module logs through a module-level ``structlog.get_logger()`` and
binds a ``component`` name; this module only decides how those events are
rendered and which level gets through. Output goes to stderr so that the
workflow commands written to stdout by the reporter stay untouched.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

import structlog


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Configure structlog for a downloader run.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        stream: Where log lines are written. Defaults to stderr.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
