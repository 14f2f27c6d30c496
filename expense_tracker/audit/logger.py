"""
Structured Logging

Every mutation of a collection is logged, which gives a local trail
of what happened to the JSON files:
- expense_saved / expense_deleted / expenses_cleared
- budget_saved / budget_deleted / budgets_cleared
- storage_read_failed / storage_write_failed

Logs go to stderr so they never mix with command output on stdout.
structlog is configured when this module is imported (WARNING level,
console renderer); the CLI calls configure_logging() again to apply
the configured level and renderer.
"""

import logging
import sys
from typing import Optional

import structlog


PACKAGE_LOGGER = "expense_tracker"


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever sys.stderr is at emit time, not at creation."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


# Handler installed by the last configure_logging() call
_handler: Optional[logging.Handler] = None


def configure_logging(level: str = "WARNING", json_logs: bool = False) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Only the expense_tracker logger tree is touched; the root logger
    and its handlers are left alone.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...)
        json_logs: Render JSON lines instead of the console renderer
    """
    global _handler

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)
    _handler = _StderrHandler()
    package_logger.addHandler(_handler)
    package_logger.setLevel(level.upper())
    package_logger.propagate = False

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # reconfiguration by the CLI must reach loggers already in use
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a named structured logger (defaults to the package logger)."""
    return structlog.get_logger(name or PACKAGE_LOGGER)


configure_logging()
