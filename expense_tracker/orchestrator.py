"""
Main Orchestrator for Expense Tracker

This module ties the repositories together and defines the flows
behind each user command:
1. Expenses (add, list, summarize, delete)
2. Budgets (set, get)

Every flow makes one repository call per step. The steps of a flow are
NOT atomic across the two collections: add_expense() saves the expense,
then reads the budget, then sums the month. A budget saved by another
thread in between is visible to the later steps, so the reported
balance can be stale. The collections have independent locks and no
cross-file transaction exists.
"""

from datetime import date
from typing import Callable, Optional

from pydantic import BaseModel

from expense_tracker.audit import get_logger
from expense_tracker.config import ExpenseTrackerSettings, get_settings
from expense_tracker.models.budget import Budget
from expense_tracker.models.expense import Category, Expense
from expense_tracker.services.storage import (
    BudgetStorageInterface,
    ExpenseStorageInterface,
    JsonBudgetRepository,
    JsonExpenseRepository,
    JsonFileStore,
)


logger = get_logger(__name__)


BUDGET_NOT_FOUND_MESSAGE = "budget not found."


class BudgetNotFoundError(Exception):
    """No budget is stored for the requested month and year."""

    def __init__(self, month: int, year: int):
        self.month = month
        self.year = year
        super().__init__(BUDGET_NOT_FOUND_MESSAGE)


class ExpenseNotFoundError(Exception):
    """No expense is stored under the requested id."""

    def __init__(self, expense_id: int):
        self.expense_id = expense_id
        super().__init__(f"expense {expense_id} not found.")


class AddExpenseResult(BaseModel):
    """Outcome of adding an expense."""

    expense: Expense
    # None when no budget is set for the current month
    balance_left: Optional[float] = None

    @property
    def budget_exceeded(self) -> bool:
        return self.balance_left is not None and self.balance_left <= 0


def _parse_category(category: Optional[str]) -> Optional[Category]:
    if category is None:
        return None
    return Category.from_string(category)


class ExpenseFlow:
    """
    Expense commands.

    Category arguments are parsed before any storage call, so an
    unknown category never reaches the repository.
    """

    def __init__(
        self,
        expense_storage: ExpenseStorageInterface,
        budget_storage: BudgetStorageInterface,
        today: Callable[[], date] = date.today,
    ):
        self._expenses = expense_storage
        self._budgets = budget_storage
        self._today = today

    def add_expense(
        self,
        description: str,
        amount: float,
        category: str,
    ) -> AddExpenseResult:
        """
        Record a new expense and compute what is left of this month's budget.

        Raises:
            CategoryNotFoundError: If category is not a known name
            StorageIOError: If either collection cannot be read or written
        """
        parsed = Category.from_string(category)
        today = self._today()

        saved = self._expenses.save(
            Expense(
                description=description,
                amount=amount,
                category=parsed,
                created_at=today,
            )
        )

        budget = self._budgets.find_by_month_and_year(today.month, today.year)
        if budget is None:
            logger.info("no_budget_for_month", month=today.month, year=today.year)
            return AddExpenseResult(expense=saved)

        spent = self._expenses.summary_by_month(today.month)
        return AddExpenseResult(expense=saved, balance_left=budget.amount - spent)

    def list_expenses(
        self,
        month: Optional[int] = None,
        category: Optional[str] = None,
    ) -> list[Expense]:
        """List expenses, optionally narrowed by month and/or category."""
        parsed = _parse_category(category)

        if month is not None and parsed is not None:
            return self._expenses.find_by_month_and_category(month, parsed)
        if month is not None:
            return self._expenses.find_by_month(month)
        if parsed is not None:
            return self._expenses.find_by_category(parsed)
        return self._expenses.find_all()

    def summarize(
        self,
        month: Optional[int] = None,
        category: Optional[str] = None,
    ) -> float:
        """Total amount spent, optionally narrowed by month and/or category."""
        parsed = _parse_category(category)

        if month is not None and parsed is not None:
            return self._expenses.summary_by_month_and_category(month, parsed)
        if month is not None:
            return self._expenses.summary_by_month(month)
        if parsed is not None:
            return self._expenses.summary_by_category(parsed)
        return self._expenses.summary_all()

    def delete_expense(self, expense_id: int) -> None:
        """
        Delete one expense.

        Raises:
            ExpenseNotFoundError: If no expense has this id
        """
        if not self._expenses.exists_by_id(expense_id):
            raise ExpenseNotFoundError(expense_id)
        self._expenses.delete_by_id(expense_id)


class BudgetFlow:
    """Budget commands. Missing month/year default to today's."""

    def __init__(
        self,
        budget_storage: BudgetStorageInterface,
        today: Callable[[], date] = date.today,
    ):
        self._budgets = budget_storage
        self._today = today

    def set_budget(
        self,
        amount: float,
        month: int,
        year: Optional[int] = None,
    ) -> Budget:
        """Set the budget for a month, replacing any earlier one."""
        if year is None:
            year = self._today().year
        return self._budgets.save(Budget(amount=amount, month=month, year=year))

    def get_budget(
        self,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Budget:
        """
        Get the budget for a month.

        Raises:
            BudgetNotFoundError: If no budget is set for that month
        """
        today = self._today()
        month = today.month if month is None else month
        year = today.year if year is None else year

        budget = self._budgets.find_by_month_and_year(month, year)
        if budget is None:
            raise BudgetNotFoundError(month, year)
        return budget


def create_app_components(
    settings: Optional[ExpenseTrackerSettings] = None,
    today: Callable[[], date] = date.today,
) -> tuple[ExpenseFlow, BudgetFlow]:
    """
    Factory function to create all application components.

    Builds one repository per collection file; the expense repository
    reads its file here to seed id assignment.

    Returns:
        (expense_flow, budget_flow)
    """
    settings = settings or get_settings()
    file_store = JsonFileStore()

    expense_storage = JsonExpenseRepository(
        settings.expense_file_path,
        file_handler=file_store,
        today=today,
    )
    budget_storage = JsonBudgetRepository(
        settings.budget_file_path,
        file_handler=file_store,
    )

    expense_flow = ExpenseFlow(expense_storage, budget_storage, today=today)
    budget_flow = BudgetFlow(budget_storage, today=today)

    return expense_flow, budget_flow
