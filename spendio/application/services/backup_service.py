from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from spendio.common import now_ms, utc_now_iso
from spendio.domain.enums import RestoreMode
from spendio.domain.errors import ValidationError
from spendio.logger import get_logger

from .entity_store import EntityStore
from .settings_store import SettingsStore

BACKUP_VERSION = 1


@dataclass(slots=True)
class BackupService:
    """Whole-dataset snapshot and restore across every store."""

    stores: dict[str, EntityStore[Any]]
    settings: SettingsStore

    def snapshot(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"version": BACKUP_VERSION, "exportedAt": utc_now_iso()}
        for name, store in self.stores.items():
            payload[name] = [r.to_dict() for r in store.list_all()]
        payload["settings"] = self.settings.get().to_dict()
        self.settings.update(last_backup_time=now_ms())
        get_logger().info(f"backup snapshot taken ({sum(s.count() for s in self.stores.values())} rows)")
        return payload

    def restore(self, snapshot: dict[str, Any], mode: RestoreMode | str = RestoreMode.MERGE) -> dict[str, int]:
        """Load ``snapshot`` into the stores.

        ``merge`` keeps existing rows and adds unseen ids; ``replace`` overwrites
        each collection present in the snapshot and also replaces settings.
        Returns per-collection counts (rows added for merge, rows written for replace).
        """
        if not isinstance(snapshot, dict):
            raise ValidationError("Backup must be a JSON object")
        restore_mode = RestoreMode(mode)

        rows: dict[str, list[Any]] = {}
        for name in self.stores:
            value = snapshot.get(name)
            if value is None:
                continue
            if not isinstance(value, list):
                raise ValidationError(f"Backup field {name!r} must be a list", details={"field": name})
            rows[name] = value

        counts: dict[str, int] = {}
        try:
            for name, items in rows.items():
                store = self.stores[name]
                if restore_mode is RestoreMode.REPLACE:
                    counts[name] = store.replace_all(items)
                else:
                    counts[name] = store.import_records(items)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Backup contains an unreadable row: {exc}") from exc

        if restore_mode is RestoreMode.REPLACE and isinstance(snapshot.get("settings"), dict):
            self.settings.replace(snapshot["settings"])

        get_logger().info(f"backup restored mode={restore_mode.value} counts={counts}")
        return counts
