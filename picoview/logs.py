"""structlog setup.

The terminal belongs to the viewer while a session runs, so log records go
to ``PICOVIEW_LOG_FILE`` when it is set and to stderr otherwise.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from collections.abc import Iterator
from typing import TextIO

import structlog

LOG_LEVEL_ENV = "PICOVIEW_LOG_LEVEL"
LOG_FILE_ENV = "PICOVIEW_LOG_FILE"
DEFAULT_LOG_LEVEL = "WARNING"


def _resolve_level(log_level: str) -> int:
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    return numeric_level


def setup_logging(log_level: str = DEFAULT_LOG_LEVEL, log_file: str | None = None) -> TextIO:
    """Configure structlog and return the stream records are written to."""
    if log_file:
        stream: TextIO = open(log_file, "a", encoding="utf-8", buffering=1)
    else:
        stream = sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
    return stream


@contextlib.contextmanager
def logging_session(log_level: str = DEFAULT_LOG_LEVEL, log_file: str | None = None) -> Iterator[TextIO]:
    """Configure logging for one run and close the log file afterwards.

    Records emitted after the session ends go to stderr.
    """
    stream = setup_logging(log_level, log_file)
    try:
        yield stream
    finally:
        if stream is not sys.stderr:
            structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))
            stream.close()


def logging_session_from_env() -> contextlib.AbstractContextManager[TextIO]:
    return logging_session(
        os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL),
        os.environ.get(LOG_FILE_ENV) or None,
    )
