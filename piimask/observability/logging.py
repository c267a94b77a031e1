"""Structured logging with correlation and operation tracing."""

from __future__ import annotations

import contextvars
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Generator, Optional

import structlog

from piimask.core.config import LoggingConfig, get_config

# Context variable for correlation IDs
correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def add_correlation_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add correlation ID to log events."""
    corr_id = correlation_id.get()
    if corr_id:
        event_dict["correlation_id"] = corr_id
    return event_dict


def add_timestamp(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add timestamp to log events."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure structlog and route standard library records through it.

    Modules log through ``logging.getLogger(__name__)``; the root handler
    renders those records with the same processors as structlog loggers, as
    JSON or as console lines depending on ``config.format``.
    """
    if config is None:
        config = get_config().logging

    shared_processors: list[Any] = [
        add_timestamp,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_correlation_id,
    ]

    if config.format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.WARNING))


def get_logger(name: str) -> Any:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


@contextmanager
def correlation_context(corr_id: Optional[str] = None) -> Generator[str, None, None]:
    """Context manager for correlation ID."""
    if corr_id is None:
        corr_id = str(uuid.uuid4())

    token = correlation_id.set(corr_id)
    try:
        yield corr_id
    finally:
        correlation_id.reset(token)


@contextmanager
def trace_operation(operation: str, **kwargs: Any) -> Generator[dict[str, Any], None, None]:
    """Log the start, completion or failure of an operation.

    Yields a dict the caller can fill with attributes that are attached to
    the completion event.
    """
    logger = get_logger(__name__)
    attributes: dict[str, Any] = {}
    started = time.perf_counter()

    logger.debug("Operation started", operation=operation, **kwargs)
    try:
        yield attributes
    except Exception as e:
        logger.error(
            "Operation failed",
            operation=operation,
            duration_seconds=time.perf_counter() - started,
            error=str(e),
            error_type=type(e).__name__,
            **kwargs,
        )
        raise

    logger.debug(
        "Operation completed",
        operation=operation,
        duration_seconds=time.perf_counter() - started,
        **{**kwargs, **attributes},
    )
