"""Structured logging and OpenTelemetry spans for protoc-invoker.

This module provides:
- Structured logging setup via structlog
- OpenTelemetry span helpers for compiler invocations
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer
    from structlog.stdlib import BoundLogger

_logger: BoundLogger | None = None
_tracer: Tracer | None = None

TRACER_NAME = "protoc_invoker"


def get_logger() -> BoundLogger:
    """Get the module logger, creating it if necessary.

    Returns:
        Configured structlog BoundLogger instance.
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(TRACER_NAME)
    assert _logger is not None
    return _logger


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for protoc-invoker."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = True,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for protoc-invoker.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format. If False, output human-readable.
        add_timestamp: If True, add ISO timestamp to log entries.

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=False)
    """
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.insert(1, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
    )
    logging.getLogger().setLevel(getattr(logging, log_level.upper()))


@contextmanager
def span(
    name: str,
    *,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span]:
    """Create an OpenTelemetry span with structured logging.

    Logs ``<name>_started`` at debug level, then ``<name>_completed`` or
    ``<name>_failed``. Exceptions are recorded on the span and re-raised.

    Args:
        name: Span name (e.g., "protoc.invoke").
        kind: Span kind.
        attributes: Optional span attributes, also bound to the log events.

    Yields:
        OpenTelemetry Span instance.
    """
    tracer = get_tracer()
    logger = get_logger()
    attrs = attributes or {}
    event = name.replace(".", "_")

    with tracer.start_as_current_span(name, kind=kind, attributes=attrs) as s:
        logger.debug(f"{event}_started", **attrs)
        try:
            yield s
            s.set_status(Status(StatusCode.OK))
            logger.info(f"{event}_completed", **attrs)
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            logger.error(f"{event}_failed", error=str(exc), **attrs)
            raise


@contextmanager
def protoc_operation(
    operation: str,
    *,
    root: str | None = None,
    include_count: int | None = None,
) -> Iterator[Span]:
    """Create a span for a protoc operation with standard attributes.

    Args:
        operation: Operation name (e.g., "invoke", "scan").
        root: Proto root directory.
        include_count: Number of -I include directories.

    Yields:
        OpenTelemetry Span instance.

    Example:
        >>> with protoc_operation("invoke", root="/protos"):
        ...     run_protoc()
    """
    attrs: dict[str, Any] = {"protoc.operation": operation}
    if root:
        attrs["protoc.root"] = root
    if include_count is not None:
        attrs["protoc.include_count"] = include_count

    with span(f"protoc.{operation}", attributes=attrs) as s:
        yield s
