"""Identifier allocation for new records.

Two policies are supported:

* ``uuid``      : random uuid4 strings, globally unique, not sortable.
* ``sequential``: integers handed out by a counter that is seeded past the
                   largest identifier already persisted.

Repositories receive an allocator at construction; nothing in the codebase
keeps a process-wide id counter.
"""
from __future__ import annotations
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Iterable, Union

Identifier = Union[str, int]

UUID_POLICY = "uuid"
SEQUENTIAL_POLICY = "sequential"


class IdAllocator(ABC):

    @abstractmethod
    def next(self) -> Identifier:
        """Return an identifier never handed out before."""
        ...

    @abstractmethod
    def parse(self, raw: str) -> Identifier:
        """Convert a textual id (path or query value). Raises ValueError if malformed."""
        ...

    def seed(self, existing_ids: Iterable[Identifier]) -> None:
        """Make sure ids already in storage are never allocated again."""
        return None


class UuidIdAllocator(IdAllocator):

    def next(self) -> str:
        return str(uuid.uuid4())

    def parse(self, raw: str) -> str:
        raw = (raw or "").strip()
        if not raw:
            raise ValueError("Identifier cannot be empty")
        return raw


class SequentialIdAllocator(IdAllocator):

    def __init__(self, start: int = 1):
        if start < 1:
            raise ValueError("Sequential ids start at 1 or above")
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def parse(self, raw: str) -> int:
        value = int(str(raw).strip())
        if value < 1:
            raise ValueError(f"Sequential ids are positive, got {value}")
        return value

    def seed(self, existing_ids: Iterable[Identifier]) -> None:
        numeric = [i for i in existing_ids if isinstance(i, int) and not isinstance(i, bool)]
        if not numeric:
            return
        with self._lock:
            self._next = max(self._next, max(numeric) + 1)

    def __repr__(self) -> str:
        return f"SequentialIdAllocator(next={self._next})"


def build_id_allocator(policy: str) -> IdAllocator:
    policy = (policy or "").strip().lower()
    if policy == UUID_POLICY:
        return UuidIdAllocator()
    if policy == SEQUENTIAL_POLICY:
        return SequentialIdAllocator()
    raise ValueError(
        f"Unknown id policy '{policy}'. Must be one of {[UUID_POLICY, SEQUENTIAL_POLICY]}."
    )
