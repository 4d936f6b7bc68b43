"""Structured logging setup.

Every module logs through ``structlog.get_logger(__name__)``. The CLI calls
:func:`setup_logging` once; library users who never call it get structlog's
defaults.

Usage:
    from deploytracker.logging_config import setup_logging

    setup_logging(level="DEBUG", fmt="json")
"""

import logging
import sys

import structlog


def setup_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        fmt: "console" for colourised human output, "json" for machine output
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # Logs go to stderr so report output on stdout stays clean.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )
