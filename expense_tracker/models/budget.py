"""Budget model: a spending target for one calendar month."""

from pydantic import BaseModel, Field


class Budget(BaseModel):
    """
    Monthly budget.

    (month, year) is the natural key. The year range is checked by
    the caller, not here.
    """

    amount: float = Field(
        ...,
        description="Budget amount for the period"
    )
    month: int = Field(
        ...,
        ge=1,
        le=12,
        description="Calendar month (1-12)"
    )
    year: int = Field(
        ...,
        description="Calendar year"
    )

    def same_period(self, other: "Budget") -> bool:
        return self.month == other.month and self.year == other.year
