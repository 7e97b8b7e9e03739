from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from spendio.domain.enums import DateFilterType, SortField, SortOrder

from .base import Record


@dataclass(frozen=True, slots=True)
class Interval:
    """Closed [start, end] window in local time."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(slots=True)
class DateFilter(Record):
    type: str = DateFilterType.MONTH.value
    start_date: str | None = None
    end_date: str | None = None

    def __post_init__(self) -> None:
        self.type = DateFilterType(self.type).value


@dataclass(slots=True)
class ExpenseFilters(Record):
    date_filter: DateFilter = field(default_factory=DateFilter)
    category_ids: list[str] = field(default_factory=list)
    search_query: str = ""
    sort_field: str = SortField.DATE.value
    sort_order: str = SortOrder.DESC.value
    min_amount: float | None = None
    max_amount: float | None = None

    def __post_init__(self) -> None:
        if isinstance(self.date_filter, dict):
            self.date_filter = DateFilter.from_dict(self.date_filter)
        self.sort_field = SortField(self.sort_field).value
        self.sort_order = SortOrder(self.sort_order).value
