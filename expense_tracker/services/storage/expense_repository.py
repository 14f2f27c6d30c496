"""
JSON Expense Repository

Expenses live in one JSON array. Every operation loads the whole array
under the collection lock, filters or modifies it in memory and, for
mutations, writes it back before the lock is released.

Id assignment uses an in-memory high-water mark owned by the
repository instance. It is seeded once from the file at construction
and only touched while the write lock is held, so concurrent saves
never hand out the same id. Deleting single expenses does not lower
it; delete_all() resets it to 0.
"""

from datetime import date
from pathlib import Path
from typing import Callable, Optional

from expense_tracker.audit import get_logger
from expense_tracker.models.expense import Category, Expense
from expense_tracker.services.storage.interface import (
    CollectionFileHandler,
    ExpenseStorageInterface,
)
from expense_tracker.services.storage.json_file import JsonFileStore
from expense_tracker.services.storage.locks import ReadWriteLock, lock_for_path


logger = get_logger(__name__)

ExpensePredicate = Callable[[Expense], bool]


class JsonExpenseRepository(ExpenseStorageInterface):
    """
    File-backed implementation of expense storage.

    Returned expenses are fresh objects parsed from the file, never
    references into repository state.
    """

    def __init__(
        self,
        path: Path,
        file_handler: Optional[CollectionFileHandler] = None,
        lock: Optional[ReadWriteLock] = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the repository and seed the id high-water mark.

        Args:
            path: Location of the expense JSON file
            file_handler: Collection reader/writer (JSON files by default)
            lock: Lock guarding the file. Defaults to the process-wide
                  lock for path.
            today: Clock used to stamp updated_at

        Raises:
            StorageIOError: If the existing file cannot be read
        """
        self._path = Path(path)
        self._files = file_handler or JsonFileStore()
        self._lock = lock or lock_for_path(self._path)
        self._today = today

        with self._lock.read_locked():
            expenses = self._read()
        self._max_id = max((e.id for e in expenses), default=0)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, expense: Expense) -> Expense:
        """Create a new expense or replace the one with the same id."""
        with self._lock.write_locked():
            expenses = self._read()

            if expense.id != 0 and any(e.id == expense.id for e in expenses):
                stored = expense.model_copy(update={"updated_at": self._today()})
                expenses = [e for e in expenses if e.id != expense.id]
                action = "updated"
            else:
                self._max_id += 1
                stored = expense.model_copy(update={"id": self._max_id})
                action = "created"

            expenses.append(stored)
            self._write(expenses)

        logger.info(
            "expense_saved",
            expense_id=stored.id,
            action=action,
            category=stored.category.value,
            amount=stored.amount,
        )
        return stored

    def find_by_id(self, expense_id: int) -> Optional[Expense]:
        with self._lock.read_locked():
            for expense in self._read():
                if expense.id == expense_id:
                    return expense
        return None

    def exists_by_id(self, expense_id: int) -> bool:
        with self._lock.read_locked():
            return any(e.id == expense_id for e in self._read())

    def find_all(self) -> list[Expense]:
        with self._lock.read_locked():
            return self._read()

    def find_by_month(self, month: int) -> list[Expense]:
        return self._find_filtered(lambda e: e.created_at.month == month)

    def find_by_category(self, category: Category) -> list[Expense]:
        return self._find_filtered(lambda e: e.category == category)

    def find_by_month_and_category(
        self,
        month: int,
        category: Category,
    ) -> list[Expense]:
        return self._find_filtered(
            lambda e: e.created_at.month == month and e.category == category
        )

    def summary_all(self) -> float:
        return self._sum_filtered(lambda e: True)

    def summary_by_month(self, month: int) -> float:
        return self._sum_filtered(lambda e: e.created_at.month == month)

    def summary_by_category(self, category: Category) -> float:
        return self._sum_filtered(lambda e: e.category == category)

    def summary_by_month_and_category(
        self,
        month: int,
        category: Category,
    ) -> float:
        return self._sum_filtered(
            lambda e: e.created_at.month == month and e.category == category
        )

    def delete_by_id(self, expense_id: int) -> None:
        with self._lock.write_locked():
            expenses = self._read()
            remaining = [e for e in expenses if e.id != expense_id]
            self._write(remaining)

        logger.info(
            "expense_deleted",
            expense_id=expense_id,
            removed=len(expenses) - len(remaining),
        )

    def delete_all(self) -> None:
        with self._lock.write_locked():
            self._write([])
            self._max_id = 0

        logger.info("expenses_cleared", path=str(self._path))

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._read())

    # ================== PRIVATE HELPERS ==================
    # Callers must already hold the lock.

    def _read(self) -> list[Expense]:
        expenses = self._files.read(self._path, Expense)
        logger.debug("expenses_loaded", path=str(self._path), count=len(expenses))
        return expenses

    def _write(self, expenses: list[Expense]) -> None:
        self._files.write(self._path, expenses)

    def _find_filtered(self, condition: ExpensePredicate) -> list[Expense]:
        with self._lock.read_locked():
            return [e for e in self._read() if condition(e)]

    def _sum_filtered(self, condition: ExpensePredicate) -> float:
        with self._lock.read_locked():
            return float(sum(e.amount for e in self._read() if condition(e)))
