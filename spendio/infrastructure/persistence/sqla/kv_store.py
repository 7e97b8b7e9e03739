from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from spendio.common import now_ms
from spendio.domain.errors import PersistenceError
from spendio.logger import get_logger

from .engine import DEFAULT_BUSY_TIMEOUT_S, get_engine
from .models import kv_entries, metadata
from .session import connection_scope


def ensure_kv_schema(conn: Connection) -> None:
    metadata.create_all(bind=conn, checkfirst=True)


class SqlaKeyValueStore:
    """Whole-value key/value store on one SQLite table.

    Each ``set`` replaces the full JSON document for a key inside a single
    transaction, so readers never observe a partially written collection.
    """

    def __init__(self, db_path: Path, *, busy_timeout_s: int = DEFAULT_BUSY_TIMEOUT_S) -> None:
        self.db_path = db_path
        self.engine = get_engine(db_path, busy_timeout_s=busy_timeout_s)
        self._log = get_logger().bind(store="kv")
        try:
            with connection_scope(self.engine) as conn:
                ensure_kv_schema(conn)
        except SQLAlchemyError as exc:
            raise PersistenceError("failed to initialise storage", details=str(exc)) from exc

    def get(self, key: str) -> Any | None:
        try:
            with connection_scope(self.engine) as conn:
                row = conn.execute(
                    select(kv_entries.c.value_json).where(kv_entries.c.key == key)
                ).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"failed to read {key}", details=str(exc)) from exc
        if row is None:
            return None
        try:
            return json.loads(row[0])
        except ValueError:
            # Corrupt blobs read as absent, the same way a missing key does.
            self._log.warning(f"discarding unreadable value for key={key}")
            return None

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        stamp = now_ms()
        try:
            with connection_scope(self.engine) as conn:
                result = conn.execute(
                    update(kv_entries)
                    .where(kv_entries.c.key == key)
                    .values(value_json=payload, updated_at=stamp)
                )
                if result.rowcount == 0:
                    conn.execute(
                        insert(kv_entries).values(key=key, value_json=payload, updated_at=stamp)
                    )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"failed to write {key}", details=str(exc)) from exc
        self._log.debug(f"wrote key={key} bytes={len(payload)}")
