"""
Abstract Storage Interface

We define abstract interfaces for the storage operations. This allows us to:
1. Swap the JSON files for an append-only log or a key-value store later
2. Use in-memory fakes in tests of the application layer
3. Keep the application services decoupled from file handling

The interfaces are intentionally small - just the operations the
expense and budget commands need.

Absence is not an error at this layer: lookups return None or an
empty list. Only storage faults raise.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, TypeVar

from pydantic import BaseModel

from expense_tracker.models.budget import Budget
from expense_tracker.models.expense import Category, Expense


ModelT = TypeVar("ModelT", bound=BaseModel)


class CollectionFileHandler(ABC):
    """
    Reads and writes a whole collection of records at a path.

    No partial updates: every call loads or stores the full collection.
    """

    @abstractmethod
    def read(self, path: Path, model_type: type[ModelT]) -> list[ModelT]:
        """
        Load every record stored at path.

        Returns:
            The records in file order, empty if the file does not exist

        Raises:
            StorageIOError: If the file exists but cannot be read or parsed
        """
        pass

    @abstractmethod
    def write(self, path: Path, records: Sequence[BaseModel]) -> None:
        """
        Replace the collection stored at path with records.

        Raises:
            StorageIOError: If the file cannot be written
        """
        pass


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense storage operations.

    Month filters match the month of created_at, whatever the year.
    """

    @abstractmethod
    def save(self, expense: Expense) -> Expense:
        """
        Create or replace an expense.

        An expense with id 0, or with an id not in the collection, is
        created under a fresh id. An existing id is replaced and its
        updated_at stamped with today.

        Returns:
            The stored expense with id and updated_at populated
        """
        pass

    @abstractmethod
    def find_by_id(self, expense_id: int) -> Optional[Expense]:
        pass

    @abstractmethod
    def exists_by_id(self, expense_id: int) -> bool:
        pass

    @abstractmethod
    def find_all(self) -> list[Expense]:
        pass

    @abstractmethod
    def find_by_month(self, month: int) -> list[Expense]:
        pass

    @abstractmethod
    def find_by_category(self, category: Category) -> list[Expense]:
        pass

    @abstractmethod
    def find_by_month_and_category(
        self,
        month: int,
        category: Category,
    ) -> list[Expense]:
        pass

    @abstractmethod
    def summary_all(self) -> float:
        """Total amount of all expenses, 0.0 when there are none."""
        pass

    @abstractmethod
    def summary_by_month(self, month: int) -> float:
        pass

    @abstractmethod
    def summary_by_category(self, category: Category) -> float:
        pass

    @abstractmethod
    def summary_by_month_and_category(
        self,
        month: int,
        category: Category,
    ) -> float:
        pass

    @abstractmethod
    def delete_by_id(self, expense_id: int) -> None:
        pass

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every expense and restart id assignment at 1."""
        pass

    @abstractmethod
    def count(self) -> int:
        pass


class BudgetStorageInterface(ABC):
    """
    Abstract interface for budget storage.

    (month, year) is the key: saving an existing period replaces it.
    """

    @abstractmethod
    def save(self, budget: Budget) -> Budget:
        pass

    @abstractmethod
    def find_by_month_and_year(self, month: int, year: int) -> Optional[Budget]:
        pass

    @abstractmethod
    def find_by_year(self, year: int) -> list[Budget]:
        pass

    @abstractmethod
    def delete_by_month_and_year(self, month: int, year: int) -> None:
        pass

    @abstractmethod
    def delete_all(self) -> None:
        pass

    @abstractmethod
    def count(self) -> int:
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageIOError(StorageError):
    """Collection file could not be read, parsed or written."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)
