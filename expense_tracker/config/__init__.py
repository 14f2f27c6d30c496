"""Configuration package."""

from expense_tracker.config.settings import (
    ExpenseTrackerSettings,
    get_settings,
)

__all__ = [
    "ExpenseTrackerSettings",
    "get_settings",
]
