from __future__ import annotations

import dataclasses
import threading
from typing import Any, Callable, ClassVar, Generic, Iterable, TypeVar

from spendio.common import generate_id, now_ms
from spendio.domain.models.base import Record
from spendio.domain.ports.kv_store import KeyValueStorePort
from spendio.logger import get_logger

T = TypeVar("T", bound=Record)

_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


class EntityStore(Generic[T]):
    """Owns one ordered collection and persists all of it on every mutation.

    Writes go to the key/value port first; the in-memory list is swapped only
    after the write returns, so a failed write leaves the store as it was.
    """

    record_type: ClassVar[type[Record]]
    storage_key: ClassVar[str]

    def __init__(
        self,
        kv: KeyValueStorePort,
        *,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        self.kv = kv
        self.clock = clock
        self.id_factory = id_factory
        self._records: list[T] = []
        self._lock = threading.RLock()
        self._log = get_logger().bind(store=self.storage_key)

    def seed(self) -> list[T]:
        return []

    def needs_seed(self, raw: Any) -> bool:
        return raw is None

    def load(self) -> list[T]:
        with self._lock:
            raw = self.kv.get(self.storage_key)
            if self.needs_seed(raw):
                seeded = self.seed()
                if seeded:
                    self._commit(seeded)
                    self._log.info(f"seeded {len(seeded)} default rows")
                else:
                    self._records = []
                return self.list_all()

            rows = raw if isinstance(raw, list) else []
            if not isinstance(raw, list):
                self._log.warning("stored value is not a list; starting empty")
            records: list[T] = []
            for row in rows:
                try:
                    records.append(self._parse(row))
                except (TypeError, ValueError) as exc:
                    self._log.warning(f"skipping unreadable row: {exc}")
            self._records = records
            return self.list_all()

    def _parse(self, row: Any) -> T:
        return self.record_type.from_dict(row)

    def _coerce(self, item: T | dict[str, Any]) -> T:
        if isinstance(item, dict):
            return self._parse(item)
        return item

    def _commit(self, records: list[T]) -> None:
        self.kv.set(self.storage_key, [r.to_dict() for r in records])
        self._records = records

    def list_all(self) -> list[T]:
        return list(self._records)

    def get_by_id(self, record_id: str) -> T | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def count(self) -> int:
        return len(self._records)

    def _check_fields(self, data: dict[str, Any]) -> None:
        unknown = set(data) - self.record_type.field_names()
        if unknown:
            raise ValueError(f"unknown fields for {self.storage_key}: {sorted(unknown)}")

    def build(self, data: dict[str, Any]) -> T:
        self._check_fields(data)
        now = self.clock()
        fields = {k: v for k, v in data.items() if k not in {"id", "created_at", "updated_at"}}
        return self.record_type(
            id=self.id_factory(),
            created_at=now,
            updated_at=now,
            **fields,
        )

    def add(self, data: dict[str, Any]) -> T:
        with self._lock:
            record = self.build(data)
            self._commit([*self._records, record])
            self._log.debug(f"added id={record.id}")
            return record

    def update(self, record_id: str, changes: dict[str, Any]) -> T | None:
        with self._lock:
            self._check_fields(changes)
            index = self._index_of(record_id)
            if index is None:
                return None
            updated = self._patched(self._records[index], changes)
            records = list(self._records)
            records[index] = updated
            self._commit(records)
            self._log.debug(f"updated id={record_id}")
            return updated

    def _patched(self, record: T, changes: dict[str, Any]) -> T:
        patch = {k: v for k, v in changes.items() if k not in _IMMUTABLE_FIELDS}
        patch["updated_at"] = self.clock()
        return dataclasses.replace(record, **patch)

    def delete(self, record_id: str) -> T | None:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            removed = self._records[index]
            self._commit([r for r in self._records if r.id != record_id])
            self._log.debug(f"deleted id={record_id}")
            return removed

    def clear_all(self) -> None:
        with self._lock:
            self._commit([])
            self._log.info("cleared all rows")

    def import_records(self, items: Iterable[T | dict[str, Any]]) -> int:
        """Union by id: rows whose id already exists are skipped. Returns how many were added."""
        with self._lock:
            existing = {r.id for r in self._records}
            merged = list(self._records)
            added = 0
            for item in items:
                record = self._coerce(item)
                if record.id in existing:
                    continue
                existing.add(record.id)
                merged.append(record)
                added += 1
            self._commit(merged)
            return added

    def replace_all(self, items: Iterable[T | dict[str, Any]]) -> int:
        with self._lock:
            records = [self._coerce(item) for item in items]
            self._commit(records)
            return len(records)

    def snapshot(self) -> list[T]:
        return list(self._records)

    def restore(self, records: list[T]) -> None:
        """Put ``records`` back in memory, then persist them."""
        with self._lock:
            self._records = list(records)
            self.kv.set(self.storage_key, [r.to_dict() for r in self._records])

    def _index_of(self, record_id: str) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None
