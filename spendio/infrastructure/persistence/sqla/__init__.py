from __future__ import annotations

from .engine import build_db_url, dispose_engine, get_engine
from .kv_store import SqlaKeyValueStore, ensure_kv_schema
from .session import connection_scope

__all__ = [
    "SqlaKeyValueStore",
    "build_db_url",
    "connection_scope",
    "dispose_engine",
    "ensure_kv_schema",
    "get_engine",
]
