"""
Data Models Package

Pydantic models for the two persisted collections.
"""

from expense_tracker.models.budget import Budget
from expense_tracker.models.expense import (
    CATEGORY_NOT_FOUND_MESSAGE,
    Category,
    CategoryNotFoundError,
    Expense,
)

__all__ = [
    "Budget",
    "CATEGORY_NOT_FOUND_MESSAGE",
    "Category",
    "CategoryNotFoundError",
    "Expense",
]
