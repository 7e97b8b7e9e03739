from __future__ import annotations

from typing import Any

from spendio.domain.models.filters import Interval
from spendio.domain.models.transfer import Transfer
from spendio.domain.ports import storage_keys

from .date_window import in_interval, month_interval
from .entity_store import EntityStore


class TransferStore(EntityStore[Transfer]):
    """Transfers only. Account balances are the caller's concern (see ``TransferLedger``)."""

    record_type = Transfer
    storage_key = storage_keys.TRANSFERS

    def update(self, record_id: str, changes: dict[str, Any]) -> Transfer | None:
        """Apply ``changes`` and return the record as it was *before* the edit."""
        with self._lock:
            previous = self.get_by_id(record_id)
            if previous is None:
                return None
            super().update(record_id, changes)
            return previous

    def total(self, interval: Interval | None = None) -> float:
        return sum((t.amount for t in self._records if in_interval(t.date, interval)), 0.0)

    def for_month(self, month: str) -> list[Transfer]:
        interval = month_interval(month)
        rows = [t for t in self._records if in_interval(t.date, interval)]
        rows.sort(key=lambda t: t.date, reverse=True)
        return rows

    def for_account(self, account_id: str) -> list[Transfer]:
        return [
            t for t in self._records
            if t.from_account_id == account_id or t.to_account_id == account_id
        ]
