"""Shared fixtures: every test gets its own data directory."""

from datetime import date

import pytest

from expense_tracker.audit import configure_logging
from expense_tracker.config import get_settings
from expense_tracker.models.expense import Category, Expense
from expense_tracker.services.storage import (
    JsonBudgetRepository,
    JsonExpenseRepository,
    JsonFileStore,
)


FIXED_TODAY = date(2025, 6, 15)


@pytest.fixture
def today():
    return FIXED_TODAY


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "expense-tracker"


@pytest.fixture
def expense_path(data_dir):
    return data_dir / "expense.json"


@pytest.fixture
def budget_path(data_dir):
    return data_dir / "config.json"


@pytest.fixture
def file_store():
    return JsonFileStore()


@pytest.fixture
def expense_repo(expense_path, today):
    return JsonExpenseRepository(expense_path, today=lambda: today)


@pytest.fixture
def budget_repo(budget_path):
    return JsonBudgetRepository(budget_path)


@pytest.fixture
def sample_expenses():
    """Expenses spread over two months and three categories."""
    return [
        Expense(description="Groceries", amount=500.3, category=Category.FOOD,
                created_at=date(2025, 6, 1)),
        Expense(description="Fiber", amount=200.0, category=Category.INTERNET_BILL,
                created_at=date(2025, 6, 3)),
        Expense(description="Apples", amount=12.5, category=Category.FRUITS,
                created_at=date(2025, 7, 2)),
        Expense(description="Dinner", amount=40.0, category=Category.FOOD,
                created_at=date(2025, 7, 9)),
    ]


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    configure_logging("WARNING")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, data_dir):
    """Point settings at the test data directory and drop the cache."""
    monkeypatch.setenv("EXPENSE_TRACKER_DATA_DIR", str(data_dir))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
