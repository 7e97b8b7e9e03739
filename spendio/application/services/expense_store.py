from __future__ import annotations

from datetime import datetime

from spendio.domain.enums import SortField, SortOrder
from spendio.domain.models.expense import Expense
from spendio.domain.models.filters import ExpenseFilters
from spendio.domain.ports import storage_keys

from .date_window import in_interval, parse_day, resolve_interval
from .entity_store import EntityStore


class ExpenseStore(EntityStore[Expense]):
    record_type = Expense
    storage_key = storage_keys.EXPENSES

    def filter(self, filters: ExpenseFilters | None = None, *, now: datetime | None = None) -> list[Expense]:
        opts = filters or ExpenseFilters()
        interval = resolve_interval(opts.date_filter, now)
        rows = [e for e in self._records if in_interval(e.date, interval)]

        if opts.category_ids:
            wanted = set(opts.category_ids)
            rows = [e for e in rows if e.category_id in wanted]

        query = opts.search_query.strip().lower()
        if query:
            rows = [e for e in rows if query in e.note.lower()]

        if opts.min_amount is not None:
            rows = [e for e in rows if e.amount >= opts.min_amount]
        if opts.max_amount is not None:
            rows = [e for e in rows if e.amount <= opts.max_amount]

        descending = opts.sort_order == SortOrder.DESC
        if opts.sort_field == SortField.AMOUNT:
            rows.sort(key=lambda e: e.amount, reverse=descending)
        else:
            rows.sort(key=lambda e: parse_day(e.date) or datetime.min.date(), reverse=descending)
        return rows
