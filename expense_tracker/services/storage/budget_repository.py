"""
JSON Budget Repository

Budgets have no surrogate id: (month, year) is the key and saving a
period that already exists replaces the old entry outright.
"""

from pathlib import Path
from typing import Optional

from expense_tracker.audit import get_logger
from expense_tracker.models.budget import Budget
from expense_tracker.services.storage.interface import (
    BudgetStorageInterface,
    CollectionFileHandler,
)
from expense_tracker.services.storage.json_file import JsonFileStore
from expense_tracker.services.storage.locks import ReadWriteLock, lock_for_path


logger = get_logger(__name__)


class JsonBudgetRepository(BudgetStorageInterface):
    """File-backed implementation of budget storage."""

    def __init__(
        self,
        path: Path,
        file_handler: Optional[CollectionFileHandler] = None,
        lock: Optional[ReadWriteLock] = None,
    ):
        self._path = Path(path)
        self._files = file_handler or JsonFileStore()
        self._lock = lock or lock_for_path(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, budget: Budget) -> Budget:
        """Insert the budget, replacing any budget for the same period."""
        stored = budget.model_copy()
        with self._lock.write_locked():
            budgets = [b for b in self._read() if not b.same_period(stored)]
            budgets.append(stored)
            self._write(budgets)

        logger.info(
            "budget_saved",
            month=stored.month,
            year=stored.year,
            amount=stored.amount,
        )
        return stored

    def find_by_month_and_year(self, month: int, year: int) -> Optional[Budget]:
        with self._lock.read_locked():
            for budget in self._read():
                if budget.month == month and budget.year == year:
                    return budget
        return None

    def find_by_year(self, year: int) -> list[Budget]:
        with self._lock.read_locked():
            return [b for b in self._read() if b.year == year]

    def delete_by_month_and_year(self, month: int, year: int) -> None:
        with self._lock.write_locked():
            budgets = self._read()
            remaining = [
                b for b in budgets if not (b.month == month and b.year == year)
            ]
            self._write(remaining)

        logger.info(
            "budget_deleted",
            month=month,
            year=year,
            removed=len(budgets) - len(remaining),
        )

    def delete_all(self) -> None:
        with self._lock.write_locked():
            self._write([])

        logger.info("budgets_cleared", path=str(self._path))

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._read())

    def _read(self) -> list[Budget]:
        return self._files.read(self._path, Budget)

    def _write(self, budgets: list[Budget]) -> None:
        self._files.write(self._path, budgets)
