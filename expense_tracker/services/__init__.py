"""Services package."""

from expense_tracker.services.storage import (
    BudgetStorageInterface,
    CollectionFileHandler,
    ExpenseStorageInterface,
    JsonBudgetRepository,
    JsonExpenseRepository,
    JsonFileStore,
    ReadWriteLock,
    StorageError,
    StorageIOError,
    lock_for_path,
)

__all__ = [
    # Storage services
    "BudgetStorageInterface",
    "CollectionFileHandler",
    "ExpenseStorageInterface",
    "JsonBudgetRepository",
    "JsonExpenseRepository",
    "JsonFileStore",
    "ReadWriteLock",
    "StorageError",
    "StorageIOError",
    "lock_for_path",
]
