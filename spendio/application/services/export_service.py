from __future__ import annotations

import csv
import io
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from spendio.common import utc_now_iso
from spendio.domain.enums import ExportFormat, SortOrder
from spendio.domain.errors import ValidationError
from spendio.domain.models.category import UNKNOWN_CATEGORY_NAME
from spendio.domain.models.expense import Expense
from spendio.domain.models.filters import DateFilter, ExpenseFilters

from .category_store import CategoryStore
from .expense_store import ExpenseStore
from .settings_store import SettingsStore

CSV_HEADER = ["Date", "Amount", "Currency", "Category", "Note", "Created At"]


def _plain_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else repr(value)


@dataclass(slots=True)
class ExportedFile:
    filename: str
    media_type: str
    content: str


@dataclass(slots=True)
class ExportService:
    expenses: ExpenseStore
    categories: CategoryStore
    settings: SettingsStore

    def export_expenses(
        self,
        fmt: ExportFormat | str = ExportFormat.CSV,
        date_filter: DateFilter | None = None,
    ) -> ExportedFile:
        export_format = ExportFormat(fmt)
        rows = self.expenses.filter(
            ExpenseFilters(date_filter=date_filter or DateFilter(type="all"), sort_order=SortOrder.ASC.value)
        )
        if not rows:
            raise ValidationError("No expenses to export")
        stamp = utc_now_iso()[:10]
        if export_format is ExportFormat.JSON:
            return ExportedFile(f"expenses_{stamp}.json", "application/json", self.render_json(rows))
        return ExportedFile(f"expenses_{stamp}.csv", "text/csv", self.render_csv(rows))

    def _category_name(self, category_id: str) -> str:
        category = self.categories.get_by_id(category_id)
        return category.name if category else UNKNOWN_CATEGORY_NAME

    def render_csv(self, rows: list[Expense]) -> str:
        currency = self.settings.get().currency.code
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for exp in rows:
            writer.writerow(
                [
                    exp.date,
                    _plain_number(exp.amount),
                    currency,
                    self._category_name(exp.category_id),
                    exp.note,
                    datetime.fromtimestamp(exp.created_at / 1000).strftime("%Y-%m-%d %H:%M:%S"),
                ]
            )
        return buf.getvalue()

    def render_json(self, rows: list[Expense]) -> str:
        currency = self.settings.get().currency.code
        items: list[dict[str, Any]] = []
        for exp in rows:
            item = exp.to_dict()
            item["categoryName"] = self._category_name(exp.category_id)
            item["currency"] = currency
            items.append(item)
        payload = {
            "exportedAt": utc_now_iso(),
            "currency": currency,
            "totalExpenses": len(items),
            "expenses": items,
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)
