"""Logging configuration for render-proxy."""

import logging
import sys
from typing import Any

import structlog


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so a replaced stream is never reused.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for the application.

    Call once at application startup. Output goes to stderr so that
    rendered HTML written to stdout stays clean.

    Args:
        verbose: Emit debug-level events when True.
    """
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(**initial_values: Any) -> Any:
    """Get a configured logger instance, optionally pre-bound."""
    return structlog.get_logger(**initial_values)
