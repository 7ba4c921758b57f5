"""
Structured logging configuration for the order service.

Uses structlog for structured, context-aware logging with:
- JSON output for production
- Pretty console output for development
- Order number propagation into every log entry
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generator

import structlog
from structlog.types import Processor

from .config import get_settings

# Context variables for request-scoped data
_order_number: ContextVar[str | None] = ContextVar('order_number', default=None)


def get_order_number() -> str | None:
    """Get the current order number from context."""
    return _order_number.get()


def add_context_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor that adds context variables to log entries."""
    order_number = get_order_number()

    if order_number and 'order_number' not in event_dict:
        event_dict['order_number'] = order_number

    return event_dict


def configure_logging(
    json_output: bool = False,
    log_level: str | None = None,
) -> None:
    """
    Configure structlog for the application.

    Args:
        json_output: If True, output JSON logs (for production).
                    If False, output pretty console logs (for development).
        log_level: Override log level (defaults to settings.LOG_LEVEL)
    """
    level = log_level or get_settings().LOG_LEVEL
    level_num = getattr(logging, level.upper(), logging.INFO)

    # Standard library logging config
    logging.basicConfig(
        format='%(message)s',
        stream=sys.stdout,
        level=level_num,
    )

    # Shared processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_context_info,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        # Production: JSON output
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # Development: Pretty console output
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


@contextmanager
def logging_context(order_number: str | None = None) -> Generator[None, None, None]:
    """
    Context manager for setting logging context variables.

    Usage:
        with logging_context(order_number="Order#1234"):
            logger.info("inventory.updated")  # Includes order_number
    """
    token = _order_number.set(order_number) if order_number is not None else None
    try:
        yield
    finally:
        if token is not None:
            _order_number.reset(token)


# Initialize logging on module import (development mode by default)
# The CLI calls configure_logging(json_output=True) when asked for JSON
configure_logging(json_output=get_settings().LOG_JSON)
