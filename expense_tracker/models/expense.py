"""
Expense Models

The on-disk names (expenseId, createAt, updatedAt) are kept as field
aliases so existing expense.json files stay readable. Python code uses
the snake_case names; both are accepted on construction.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


CATEGORY_NOT_FOUND_MESSAGE = "category not found."


class CategoryNotFoundError(ValueError):
    """Raised when a category name does not match any Category."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(CATEGORY_NOT_FOUND_MESSAGE)


class Category(str, Enum):
    """
    Fixed set of expense categories.

    Values equal the names: the JSON files store the name.
    """
    FOOD = "FOOD"
    FRUITS = "FRUITS"
    INTERNET_BILL = "INTERNET_BILL"
    TELEPHONE_BILL = "TELEPHONE_BILL"
    ELECTRICITY_BILL = "ELECTRICITY_BILL"
    WATER_BILL = "WATER_BILL"
    GAS_BILL = "GAS_BILL"
    CLEANING = "CLEANING"
    GARBAGE = "GARBAGE"
    DEBTS = "DEBTS"
    OTHER = "OTHER"

    @classmethod
    def from_string(cls, value: str) -> "Category":
        """
        Parse a category name, ignoring case and surrounding whitespace.

        Raises:
            CategoryNotFoundError: If the name is not a known category
        """
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise CategoryNotFoundError(value) from None


class Expense(BaseModel):
    """
    A single expense record.

    id 0 means "not yet stored"; the repository assigns the real id
    on the first save. created_at cannot be changed after construction.
    The description is stored exactly as given.

    An unknown category raises pydantic.ValidationError, whose single
    error carries the CategoryNotFoundError under ctx["error"]. Callers
    that want CategoryNotFoundError itself resolve the name with
    Category.from_string before building the model.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(
        default=0,
        ge=0,
        alias="expenseId",
        description="Repository assigned id, 0 when unassigned"
    )
    created_at: date = Field(
        default_factory=date.today,
        alias="createAt",
        frozen=True,
        description="Day the expense was recorded"
    )
    updated_at: Optional[date] = Field(
        default=None,
        alias="updatedAt",
        description="Day the record was last replaced"
    )
    description: str = Field(
        ...,
        description="What the money was spent on"
    )
    amount: float = Field(
        ...,
        description="Amount spent"
    )
    category: Category

    @field_validator('category', mode='before')
    @classmethod
    def parse_category(cls, v):
        if isinstance(v, str) and not isinstance(v, Category):
            return Category.from_string(v)
        return v
