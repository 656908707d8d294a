"""Shared CRUD over one RecordStore collection.

Every mutation is a full read-modify-write of the collection, executed while
holding the store's lock so two callers cannot interleave their cycles.
"""
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Callable, Generic, List, Optional, Type, TypeVar

from knowledge_api.domain.common.ids import IdAllocator, Identifier
from knowledge_api.persistence.interfaces.record_store import RecordStore

logger = logging.getLogger(__name__)

M = TypeVar("M")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonCollectionRepository(Generic[M]):
    model: Type[M]
    label = "record"

    def __init__(self, store: RecordStore, ids: IdAllocator):
        self._store = store
        self._ids = ids
        self._ids.seed(row.get("id") for row in self._store.read_all())

    # ------------------------------------------------------------------
    # Hooks for subclasses
    # ------------------------------------------------------------------
    def _prepare_create(self, data: dict) -> dict:
        return dict(data)

    def _prepare_update(self, existing: dict, data: dict) -> dict:
        return dict(data)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _to_model(self, row: dict) -> M:
        return self.model.from_record(row)

    def _find_where(self, predicate: Callable[[dict], bool]) -> List[M]:
        return [self._to_model(r) for r in self._store.read_all() if predicate(r)]

    @staticmethod
    def _index_of(rows: List[dict], record_id: Identifier) -> int:
        for i, row in enumerate(rows):
            if row.get("id") == record_id:
                return i
        return -1

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def create(self, data: dict) -> M:
        now = _now_iso()
        with self._store.locked():
            rows = self._store.read_all()
            record = self._prepare_create(data)
            record.update(id=self._ids.next(), created_at=now, updated_at=now)
            item = self._to_model(record)
            rows.append(item.to_record())
            self._store.write_all(rows)
        logger.info("Created %s '%s'", self.label, item.id)
        return item

    def find_by_id(self, record_id: Identifier) -> Optional[M]:
        for row in self._store.read_all():
            if row.get("id") == record_id:
                return self._to_model(row)
        return None

    def find_all(self) -> List[M]:
        return [self._to_model(r) for r in self._store.read_all()]

    def update(self, record_id: Identifier, data: dict) -> Optional[M]:
        with self._store.locked():
            rows = self._store.read_all()
            index = self._index_of(rows, record_id)
            if index == -1:
                logger.info("Update skipped, %s '%s' not found", self.label, record_id)
                return None

            existing = rows[index]
            merged = {**existing, **self._prepare_update(existing, data)}
            merged.update(id=existing["id"], created_at=existing.get("created_at"), updated_at=_now_iso())
            item = self._to_model(merged)
            rows[index] = item.to_record()
            self._store.write_all(rows)
        logger.info("Updated %s '%s'", self.label, record_id)
        return item

    def delete(self, record_id: Identifier) -> bool:
        with self._store.locked():
            rows = self._store.read_all()
            index = self._index_of(rows, record_id)
            if index == -1:
                return False
            del rows[index]
            self._store.write_all(rows)
        logger.info("Deleted %s '%s'", self.label, record_id)
        return True
