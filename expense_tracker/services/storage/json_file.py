"""
JSON File Storage

Each collection is one JSON file holding a top-level array. Every
read loads the whole array, every write replaces the whole file.

TRADEOFFS:
- Fine for personal expense tracking (hundreds of records)
- No transactions: callers hold a lock around read/modify/write
- A write goes straight to the target file. If it fails halfway the
  previous content may already be truncated; there is no
  temp-file-then-rename step.
"""

import json
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, ValidationError

from expense_tracker.audit import get_logger
from expense_tracker.services.storage.interface import (
    CollectionFileHandler,
    ModelT,
    StorageIOError,
)


logger = get_logger(__name__)


class JsonFileStore(CollectionFileHandler):
    """
    Whole-collection JSON file handler.

    Records are written by alias with ISO dates, so the files keep the
    field names other tools expect (expenseId, createAt, ...).
    """

    def __init__(self, indent: int = 2):
        self._indent = indent

    def read(self, path: Path, model_type: type[ModelT]) -> list[ModelT]:
        """Load a collection, returning [] when the file is missing."""
        path = Path(path)
        if not path.exists():
            return []

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("storage_read_failed", path=str(path), error=str(e))
            raise StorageIOError(f"Error reading from file {path}: {e}", path) from e

        if not isinstance(data, list):
            logger.error("storage_read_failed", path=str(path), error="not a JSON array")
            raise StorageIOError(
                f"Error reading from file {path}: expected a JSON array", path
            )

        try:
            return [model_type.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error("storage_read_failed", path=str(path), error=str(e))
            raise StorageIOError(f"Malformed record in {path}: {e}", path) from e

    def write(self, path: Path, records: Sequence[BaseModel]) -> None:
        """Replace the file at path with records, creating parent directories."""
        path = Path(path)
        payload = [record.model_dump(mode="json", by_alias=True) for record in records]

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, indent=self._indent)
        except OSError as e:
            logger.error("storage_write_failed", path=str(path), error=str(e))
            raise StorageIOError(f"Error writing to file {path}: {e}", path) from e
