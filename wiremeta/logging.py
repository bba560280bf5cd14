"""Structured logging configuration using structlog.

Library modules only emit events; call setup_logging() from applications
(or the CLI) to decide where they go.
"""

import logging
import sys
from typing import Any

import structlog


def setup_logging(*, json_output: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog for wiremeta.

    Args:
        json_output: If True, render logs as JSON. If False, use dev-friendly console output.
        log_level: Minimum log level to emit (DEBUG, INFO, WARNING, ERROR).
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[log_level.upper()]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


_quiet_wrapper = structlog.make_filtering_bound_logger(logging.WARNING)


class _LibraryLogger:
    """Lazy logger that stays quiet until structlog is configured.

    Unconfigured structlog prints every event to stdout, so events below
    WARNING are dropped until the application calls setup_logging() or
    configures structlog itself.
    """

    def __init__(self, initial_values: dict[str, Any]):
        self._initial_values = initial_values

    def _logger(self) -> Any:
        if structlog.is_configured():
            return structlog.get_logger(**self._initial_values)
        return structlog.wrap_logger(None, wrapper_class=_quiet_wrapper, **self._initial_values)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._logger(), name)


def get_logger(**initial_values: Any) -> Any:
    """Return a logger for wiremeta's library modules."""
    return _LibraryLogger(initial_values)
