"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements whole-file JSON collections, but designed to be swappable.
"""

from expense_tracker.services.storage.interface import (
    BudgetStorageInterface,
    CollectionFileHandler,
    ExpenseStorageInterface,
    StorageError,
    StorageIOError,
)
from expense_tracker.services.storage.json_file import JsonFileStore
from expense_tracker.services.storage.locks import ReadWriteLock, lock_for_path
from expense_tracker.services.storage.expense_repository import JsonExpenseRepository
from expense_tracker.services.storage.budget_repository import JsonBudgetRepository

__all__ = [
    # Interfaces
    "BudgetStorageInterface",
    "CollectionFileHandler",
    "ExpenseStorageInterface",
    # Exceptions
    "StorageError",
    "StorageIOError",
    # JSON file implementation
    "JsonBudgetRepository",
    "JsonExpenseRepository",
    "JsonFileStore",
    "ReadWriteLock",
    "lock_for_path",
]
