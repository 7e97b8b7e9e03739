from __future__ import annotations

from spendio.domain.models.filters import Interval
from spendio.domain.models.income import Income
from spendio.domain.ports import storage_keys

from . import aggregation
from .date_window import month_interval
from .entity_store import EntityStore


class IncomeStore(EntityStore[Income]):
    record_type = Income
    storage_key = storage_keys.INCOMES

    def total(self, interval: Interval | None = None) -> float:
        return aggregation.total(self._records, interval)

    def monthly_total(self, month: str) -> float:
        return aggregation.total(self._records, month_interval(month))

    def totals_by_category(self, interval: Interval | None = None) -> list[dict[str, object]]:
        """Per-category sums without the category join; ids need not resolve."""
        sums: dict[str, float] = {}
        for inc in aggregation.in_window(self._records, interval):
            sums[inc.category_id] = sums.get(inc.category_id, 0.0) + inc.amount
        rows = [{"categoryId": cid, "total": amount} for cid, amount in sums.items()]
        rows.sort(key=lambda row: row["total"], reverse=True)
        return rows

    def for_month(self, month: str) -> list[Income]:
        rows = aggregation.in_window(self._records, month_interval(month))
        rows.sort(key=lambda inc: inc.date, reverse=True)
        return rows
