"""JSON-file and in-memory implementations of RecordStore."""
from __future__ import annotations
import copy
import json
import logging
import os
import tempfile
from typing import List

from knowledge_api.persistence.interfaces.record_store import RecordStore, StoreError

logger = logging.getLogger(__name__)


class JsonFileStore(RecordStore):
    """One collection per file, stored as a pretty-printed JSON array."""

    def __init__(self, path: str):
        super().__init__()
        self.path = os.path.abspath(path)

    def _ensure_file(self) -> None:
        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        if os.path.exists(self.path):
            return
        # Readers call this unlocked; re-check under the lock so a concurrent
        # writer's os.replace is never overwritten with an empty collection
        with self.locked():
            if not os.path.exists(self.path):
                logger.info("Creating empty collection at %s", self.path)
                self._replace_contents([])

    def _replace_contents(self, records: List[dict]) -> None:
        fd, tmp_path = tempfile.mkstemp(
            dir=os.path.dirname(self.path), prefix=".tmp-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def read_all(self) -> List[dict]:
        try:
            self._ensure_file()
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read collection {self.path}: {e}") from e
        if not isinstance(data, list):
            raise StoreError(f"Collection {self.path} must hold a JSON array, got {type(data).__name__}")
        return data

    def write_all(self, records: List[dict]) -> None:
        try:
            with self.locked():
                os.makedirs(os.path.dirname(self.path), exist_ok=True)
                self._replace_contents(records)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Cannot write collection {self.path}: {e}") from e

    def __repr__(self) -> str:
        return f"JsonFileStore({self.path!r})"


class InMemoryStore(RecordStore):
    """Process-local collection; hands out copies so callers cannot alias stored rows."""

    def __init__(self, records: List[dict] | None = None):
        super().__init__()
        self._records: List[dict] = copy.deepcopy(records or [])

    def read_all(self) -> List[dict]:
        return copy.deepcopy(self._records)

    def write_all(self, records: List[dict]) -> None:
        self._records = copy.deepcopy(list(records))
