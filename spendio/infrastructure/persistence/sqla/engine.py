from __future__ import annotations

import atexit
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

DEFAULT_BUSY_TIMEOUT_S = 5

_ENGINE_CACHE: dict[str, Engine] = {}


def build_db_url(db_path: Path) -> str:
    return f"sqlite+pysqlite:///{db_path}"


def _apply_pragmas(dbapi_conn: Any, _: Any) -> None:
    # Readers keep the last committed collection while a writer replaces it.
    cursor = dbapi_conn.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
    finally:
        cursor.close()


def get_engine(db_path: Path, *, busy_timeout_s: int = DEFAULT_BUSY_TIMEOUT_S) -> Engine:
    """Return the cached engine for ``db_path``; the timeout only applies on first use."""
    key = str(db_path.resolve())
    engine = _ENGINE_CACHE.get(key)
    if engine is not None:
        return engine

    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        build_db_url(db_path),
        connect_args={"check_same_thread": False, "timeout": busy_timeout_s},
    )
    event.listen(engine, "connect", _apply_pragmas)
    _ENGINE_CACHE[key] = engine
    return engine


def dispose_engine(db_path: Path) -> None:
    engine = _ENGINE_CACHE.pop(str(db_path.resolve()), None)
    if engine is not None:
        engine.dispose()


def dispose_all_engines() -> None:
    while _ENGINE_CACHE:
        _, engine = _ENGINE_CACHE.popitem()
        engine.dispose()


atexit.register(dispose_all_engines)
