"""Abstract full-collection store consumed by the JSON repositories."""
from __future__ import annotations
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List


class StoreError(RuntimeError):
    """Backing collection could not be read or written."""


class RecordStore(ABC):

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @abstractmethod
    def read_all(self) -> List[dict]:
        """Return the whole collection, creating an empty one on first access."""
        ...

    @abstractmethod
    def write_all(self, records: List[dict]) -> None:
        """Replace the whole collection with ``records``."""
        ...

    @contextmanager
    def locked(self) -> Iterator["RecordStore"]:
        """Hold this store's lock for one read-compute-write cycle."""
        with self._lock:
            yield self
