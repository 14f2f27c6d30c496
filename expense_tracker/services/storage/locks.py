"""
Reader/Writer Lock

One lock guards one collection file. Readers share it, a writer
holds it alone. Once a writer is waiting, new readers queue behind it
so a steady stream of reads cannot starve a save.

The lock is not reentrant: code holding it must not try to acquire
it again.
"""

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


class ReadWriteLock:
    """Writer-preferring reader/writer lock built on a Condition."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            except BaseException:
                # readers parked behind this writer must re-check
                self._waiting_writers -= 1
                self._cond.notify_all()
                raise
            self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without the write lock")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


_registry: dict[Path, ReadWriteLock] = {}
_registry_guard = threading.Lock()


def lock_for_path(path: Path) -> ReadWriteLock:
    """
    Get the process-wide lock for a collection file.

    Paths are resolved first, so two spellings of the same file share
    one lock.
    """
    key = Path(path).expanduser().resolve()
    with _registry_guard:
        lock = _registry.get(key)
        if lock is None:
            lock = ReadWriteLock()
            _registry[key] = lock
        return lock
