"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.contextvars import bound_contextvars


def setup_logging(log_level: str = "INFO", json_output: bool = True):
    """Configure structlog output to stdout.

    JSON lines by default; ``json_output=False`` renders for a terminal (used
    by the command-line script). Call once at process startup.
    """
    renderer = structlog.processors.JSONRenderer(ensure_ascii=False) if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper())),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
    )


def resolve_context(text: str, target_format: str, locale: str):
    """Bind the request being resolved to every log line emitted inside."""
    return bound_contextvars(input=text, format=target_format, locale=locale)


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a bound logger for the given component *name*."""
    return structlog.get_logger(name)
