from __future__ import annotations

from typing import Any

from spendio.domain.models.budget import Budget
from spendio.domain.ports import storage_keys

from .date_window import parse_month
from .entity_store import EntityStore


class BudgetStore(EntityStore[Budget]):
    record_type = Budget
    storage_key = storage_keys.BUDGETS

    def add(self, data: dict[str, Any]) -> Budget:
        """Create a budget, or update amount/rollover of the one already set for (category, month)."""
        parse_month(str(data.get("month", "")))
        with self._lock:
            existing = self.find(str(data.get("category_id", "")), str(data.get("month", "")))
            if existing is None:
                return super().add(data)
            changes: dict[str, Any] = {"amount": data.get("amount", existing.amount)}
            if "rollover" in data:
                changes["rollover"] = data["rollover"]
            updated = self.update(existing.id, changes)
            assert updated is not None
            return updated

    def find(self, category_id: str, month: str) -> Budget | None:
        return next(
            (b for b in self._records if b.category_id == category_id and b.month == month),
            None,
        )

    def for_month(self, month: str) -> list[Budget]:
        return [b for b in self._records if b.month == month]
