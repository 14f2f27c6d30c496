"""Logging package."""

from expense_tracker.audit.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
