"""Structured logging configuration with OpenTelemetry trace correlation.

Request-scoped CORS fields (``cors_origin``, ``cors_kind``) are bound by the
CORS middleware through ``structlog.contextvars`` and merged into every event
logged while the request is handled, including events from route handlers.
"""

import logging
import sys
from collections.abc import Callable
from typing import Any, cast

import structlog
from opentelemetry import trace

from src.infrastructure.config import Settings


EventDict = dict[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]


def add_trace_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add OpenTelemetry trace context to log events.

    Only trace_id, span_id and trace_flags are added, and only when a valid
    span is active (e.g. when the host application instruments its ASGI app).
    """
    span = trace.get_current_span()
    if span and span.get_span_context().is_valid:
        span_context = span.get_span_context()
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
        event_dict["trace_flags"] = format(span_context.trace_flags, "02x")
    return event_dict


def add_service_context(settings: Settings) -> Processor:
    """Build a processor stamping every event with the service identity.

    Values already present on the event win, so a caller can still log on
    behalf of another component.
    """
    service = {
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
    }

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in service.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def configure_logging(settings: Settings) -> None:
    """Configure stdlib logging and structlog for the gateway.

    Development gets a colourised console renderer; every other environment
    emits one JSON object per line.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    # uvicorn's access log duplicates the middleware's request events
    logging.getLogger("uvicorn.access").setLevel(max(log_level, logging.WARNING))

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_context(settings),
        add_trace_context,
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: list[Processor]
    if settings.is_development:
        renderer = [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        renderer = [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=cast("Any", shared_processors + renderer),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
