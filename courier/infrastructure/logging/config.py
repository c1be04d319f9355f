"""Structured logging for courier.

Courier modules only ever call :func:`get_logger`. Nothing in the package
configures logging on import; an application that wants courier's log
format calls :func:`configure_logging` once at startup. That call touches
the ``courier`` logger hierarchy and structlog, never the root logger.
"""

import logging
import sys
from typing import Any, TextIO, cast

import structlog
from opentelemetry import trace

from courier.infrastructure.config import Settings
from courier.utils.sanitizer import sanitize_dict


LOGGER_NAME = "courier"
HANDLER_NAME = "courier-stream"


def sanitize_sensitive_data(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Redact provider credentials from a log event.

    Server tokens and API keys can reach an event through client headers or
    settings dumps; they are replaced before any renderer sees them.
    """
    return sanitize_dict(event_dict, recursive=True)


def add_trace_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Attach the active OpenTelemetry span ids, if a span is recording."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
    return event_dict


def _install_handler(level: int, stream: TextIO) -> None:
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


def configure_logging(settings: Settings, stream: TextIO | None = None) -> None:
    """Route courier's structured logs to a stream.

    Intended for the application's entry point. Development settings render
    colored console lines; every other environment renders JSON.

    Args:
        settings: Supplies ``log_level`` and the environment
        stream: Output stream (stdout by default)
    """
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
    _install_handler(level, stream or sys.stdout)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_trace_context,
        sanitize_sensitive_data,
    ]
    if settings.is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=cast("Any", processors),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger, usually with ``__name__``."""
    return structlog.get_logger(name)
