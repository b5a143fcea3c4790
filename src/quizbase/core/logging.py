"""Structured logging.

structlog is configured once per process by ``configure_logging``: coloured
console output in development (or with ``QUIZBASE_LOG_FORMAT=console``),
one JSON object per line otherwise. Every entry carries a ``correlation_id``,
bound per request by the HTTP middleware.

Components do not reach for a module-level logger of their own choosing;
they accept a ``logger`` at construction and fall back to ``get_logger``.
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from quizbase.core.config import Settings, get_settings

THIRD_PARTY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")


def new_correlation_id() -> str:
    """Return a fresh ``cid_<12 hex>`` identifier."""
    return f"cid_{uuid.uuid4().hex[:12]}"


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    # Entries outside a request get a one-off id
    event_dict.setdefault("correlation_id", new_correlation_id())
    return event_dict


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("logger", getattr(logger, "name", None) or "quizbase")
    return event_dict


def rename_event_to_message(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Emit the log text under ``message`` in JSON output."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _renderer(settings: Settings) -> tuple[list[Processor], Processor]:
    if settings.is_development or settings.log_format == "console":
        return [], structlog.dev.ConsoleRenderer(
            colors=True, exception_formatter=structlog.dev.plain_traceback
        )
    return (
        [structlog.processors.format_exc_info, rename_event_to_message],
        structlog.processors.JSONRenderer(),
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        settings: Settings to read the level and format from. Defaults to
            ``get_settings()``.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)

    extra, renderer = _renderer(settings)
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_correlation_id,
        *extra,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Console output is not cached so that reconfiguring takes effect
        cache_logger_on_first_use=bool(extra),
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(level)


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger.

    Args:
        name: Component name, recorded as ``logger`` on every entry.
        **initial_values: Extra key-value pairs bound to every entry.
    """
    if name:
        initial_values.setdefault("logger", name)
    logger = structlog.get_logger(name or "quizbase")
    return logger.bind(**initial_values) if initial_values else logger


def bind_correlation_id(correlation_id: str) -> None:
    """Attach ``correlation_id`` to every entry logged in the current context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    """Drop every context variable bound in the current context."""
    structlog.contextvars.clear_contextvars()
