from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env(key: str, default: str | None = None) -> str | None:
    """
    Read an env var, treating empty strings as "unset".

    Exported-but-blank variables would otherwise override every default.
    """
    v = os.environ.get(key)
    if v is not None and str(v).strip() != "":
        return v
    return default


def _parse_bool(v: str | None, default: bool) -> bool:
    if v is None:
        return default
    s = str(v).strip().lower()
    if s in {"1", "true", "yes", "y", "on"}:
        return True
    if s in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_int(v: str | None, default: int) -> int:
    if v is None:
        return default
    try:
        return int(str(v).strip())
    except Exception:
        return default


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    log_level: str
    log_json: bool
    log_path: str | None
    log_rotation_mb: int
    log_retention_days: int
    storage: str
    db_path: str
    db_timeout_s: int
    currency: str

    def resolve_db_path(self, root: Path) -> Path:
        path = Path(self.db_path)
        if not path.is_absolute():
            path = root / path
        return path


def load_settings() -> Settings:
    host = _env("SPENDIO_HOST", "127.0.0.1") or "127.0.0.1"
    port = _parse_int(_env("SPENDIO_PORT", "8000"), 8000)

    log_level = (_env("SPENDIO_LOG_LEVEL", "INFO") or "INFO").upper()
    log_json = _parse_bool(_env("SPENDIO_LOG_JSON", None), False)
    log_path = _env("SPENDIO_LOG_PATH", None)

    log_rotation_mb = _parse_int(_env("SPENDIO_LOG_ROTATION_MB", "10"), 10)
    if log_rotation_mb <= 0:
        log_rotation_mb = 10
    log_retention_days = _parse_int(_env("SPENDIO_LOG_RETENTION_DAYS", "14"), 14)
    if log_retention_days <= 0:
        log_retention_days = 14

    storage = (_env("SPENDIO_STORAGE", "sqlite") or "sqlite").strip().lower()
    if storage not in {"sqlite", "memory"}:
        storage = "sqlite"
    db_path = _env("SPENDIO_DB_PATH", "spendio.db") or "spendio.db"
    db_timeout_s = _parse_int(_env("SPENDIO_DB_TIMEOUT_S", "5"), 5)
    if db_timeout_s <= 0:
        db_timeout_s = 5

    currency = (_env("SPENDIO_CURRENCY", "USD") or "USD").strip().upper()

    return Settings(
        host=host,
        port=port,
        log_level=log_level,
        log_json=log_json,
        log_path=log_path,
        log_rotation_mb=log_rotation_mb,
        log_retention_days=log_retention_days,
        storage=storage,
        db_path=db_path,
        db_timeout_s=db_timeout_s,
        currency=currency,
    )
