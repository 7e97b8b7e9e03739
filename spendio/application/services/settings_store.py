from __future__ import annotations

import dataclasses
import threading
from typing import Any

from spendio.domain.models.app_settings import AppSettings, currency_by_code
from spendio.domain.ports import storage_keys
from spendio.domain.ports.kv_store import KeyValueStorePort
from spendio.logger import get_logger


class SettingsStore:
    """App preferences kept as one object, merged over defaults on load."""

    def __init__(self, kv: KeyValueStorePort, *, default_currency: str = "USD") -> None:
        self.kv = kv
        self.default_currency = default_currency
        self._settings = self.defaults()
        self._lock = threading.RLock()
        self._log = get_logger().bind(store=storage_keys.SETTINGS)

    def defaults(self) -> AppSettings:
        return AppSettings(currency=currency_by_code(self.default_currency))

    def load(self) -> AppSettings:
        with self._lock:
            raw = self.kv.get(storage_keys.SETTINGS)
            if isinstance(raw, dict):
                try:
                    self._settings = AppSettings.merged(self.defaults(), raw)
                    return self._settings
                except (TypeError, ValueError) as exc:
                    self._log.warning(f"stored settings unreadable; using defaults: {exc}")
            self._write(self.defaults())
            return self._settings

    def _write(self, settings: AppSettings) -> None:
        self.kv.set(storage_keys.SETTINGS, settings.to_dict())
        self._settings = settings

    def get(self) -> AppSettings:
        return self._settings

    def update(self, **changes: Any) -> AppSettings:
        with self._lock:
            unknown = set(changes) - AppSettings.field_names()
            if unknown:
                raise ValueError(f"unknown settings fields: {sorted(unknown)}")
            self._write(dataclasses.replace(self._settings, **changes))
            return self._settings

    def replace(self, raw: dict[str, Any]) -> AppSettings:
        with self._lock:
            self._write(AppSettings.merged(self.defaults(), raw))
            return self._settings

    def reset(self) -> AppSettings:
        with self._lock:
            self._write(self.defaults())
            self._log.info("settings reset to defaults")
            return self._settings

    def is_onboarding_complete(self) -> bool:
        return self.kv.get(storage_keys.ONBOARDING_COMPLETE) is True

    def complete_onboarding(self) -> None:
        with self._lock:
            self.kv.set(storage_keys.ONBOARDING_COMPLETE, True)
            if self._settings.is_first_launch:
                self._write(dataclasses.replace(self._settings, is_first_launch=False))
