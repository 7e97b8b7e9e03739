from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol, Sequence

from spendio.domain.models.analytics import CategoryTotal, DailyTotal, MonthlyStats
from spendio.domain.models.category import Category
from spendio.domain.models.filters import Interval

from .date_window import days_in_month, each_day, in_interval, month_interval


class DatedAmount(Protocol):
    date: str
    amount: float
    category_id: str


def in_window(records: Iterable[DatedAmount], interval: Interval | None) -> list[DatedAmount]:
    return [r for r in records if in_interval(r.date, interval)]


def total(records: Iterable[DatedAmount], interval: Interval | None = None) -> float:
    return sum((r.amount for r in in_window(records, interval)), 0.0)


def daily_totals(records: Iterable[DatedAmount], start: date, end: date) -> list[DailyTotal]:
    """One entry per calendar day in [start, end], zero-filled."""
    by_day: dict[str, float] = {}
    for r in records:
        by_day[r.date[:10]] = by_day.get(r.date[:10], 0.0) + r.amount
    return [
        DailyTotal(date=day.isoformat(), total=by_day.get(day.isoformat(), 0.0))
        for day in each_day(start, end)
    ]


def category_breakdown(
    records: Iterable[DatedAmount],
    categories: Sequence[Category],
    interval: Interval | None = None,
) -> list[CategoryTotal]:
    scoped = in_window(records, interval)
    grand_total = sum((r.amount for r in scoped), 0.0)

    # dicts keep first-encounter order, which the stable sort below preserves for ties
    groups: dict[str, list[float]] = {}
    for r in scoped:
        slot = groups.setdefault(r.category_id, [0.0, 0])
        slot[0] += r.amount
        slot[1] += 1

    by_id = {c.id: c for c in categories}
    breakdown: list[CategoryTotal] = []
    for category_id, (amount, count) in groups.items():
        category = by_id.get(category_id)
        if category is None:
            continue
        breakdown.append(
            CategoryTotal(
                category_id=category_id,
                category_name=category.name,
                category_color=category.color,
                category_icon=category.icon,
                total=amount,
                percentage=(amount / grand_total * 100) if grand_total > 0 else 0.0,
                count=int(count),
            )
        )
    breakdown.sort(key=lambda item: item.total, reverse=True)
    return breakdown


def highest_category(breakdown: Iterable[CategoryTotal]) -> CategoryTotal | None:
    """Entry with the largest total; among equal totals the one listed last wins."""
    top: CategoryTotal | None = None
    for item in breakdown:
        if top is None or item.total >= top.total:
            top = item
    return top


def monthly_stats(
    records: Iterable[DatedAmount],
    categories: Sequence[Category],
    month: str,
) -> MonthlyStats:
    interval = month_interval(month)
    scoped = in_window(records, interval)
    month_total = sum((r.amount for r in scoped), 0.0)
    breakdown = category_breakdown(scoped, categories)
    return MonthlyStats(
        month=month,
        total=month_total,
        count=len(scoped),
        average_daily=month_total / days_in_month(month),
        highest_category=highest_category(breakdown),
        daily_totals=daily_totals(scoped, interval.start.date(), interval.end.date()),
        category_breakdown=breakdown,
    )
