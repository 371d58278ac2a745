"""Structured logging configuration.

Bound parameter values may carry user data, so log events never render
them: the ``redact_bound_values`` processor replaces anything logged
under ``value``/``values`` with its type name.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

_REDACTED_KEYS = ("value", "values")


def add_service_context(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every entry with the emitting service."""
    event_dict.setdefault("service", "slugstore")
    return event_dict


def redact_bound_values(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace bound values with their type names."""
    for key in _REDACTED_KEYS:
        if key not in event_dict:
            continue
        raw = event_dict[key]
        if isinstance(raw, (list, tuple)):
            event_dict[key] = [type(v).__name__ for v in raw]
        else:
            event_dict[key] = type(raw).__name__
    return event_dict


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
) -> None:
    """
    Set up structured logging with structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_context,
        redact_bound_values,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a bound logger instance.

    Args:
        name: Logger name (module name typically)
        **initial_context: Initial context to bind to the logger

    Returns:
        A bound structlog logger
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
