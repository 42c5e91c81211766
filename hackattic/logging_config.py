"""
Structured logging configuration using structlog.

Pretty console output by default, JSON lines with LOG_FORMAT=json.
Logs go to stderr: stdout belongs to kata output.
"""

import logging
import sys

import structlog

from hackattic.config import Settings, settings as default_settings


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    return structlog.PrintLogger(file=sys.stderr)


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure structlog and stdlib logging integration.

    Call this once at process start.
    """
    settings = settings or default_settings
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_stderr_logger_factory,
        # sys.stderr is resolved per logger so redirected streams are honoured
        cache_logger_on_first_use=False,
    )

    # stdlib logging for httpx/httpcore
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    # Request lines from httpx carry the access token in the query string
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str | None = None):
    """
    Get a lazily configured structlog logger, tagged with ``logger_name``.

    Safe at module import time: the configuration from ``setup_logging`` is
    looked up when the logger is first used, not when it is created.
    """
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
