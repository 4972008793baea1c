"""Structured logging helpers for the command pipeline.

All pipeline components log through structlog with a bound ``component``
name. Services accept an injected logger so tests can assert on events.
"""

import logging
from typing import Any, Optional

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with a level filter and console output.

    Safe to call more than once; the last call wins.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        cache_logger_on_first_use=False,
    )


def get_component_logger(component: str, logger: Optional[Any] = None) -> Any:
    """Get logger bound to a component name.

    Args:
        component: Component name (e.g., "SqlTranslator", "CommandCache")
        logger: Optional injected logger. If None, uses default structlog logger.

    Returns:
        Logger bound to the component name
    """
    base = logger or structlog.get_logger()
    return base.bind(component=component)


def get_logger() -> Any:
    """Get default structured logger."""
    return structlog.get_logger()
