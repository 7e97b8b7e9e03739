from __future__ import annotations

from datetime import datetime
from typing import Sequence

from spendio.domain.enums import Trend
from spendio.domain.models.analytics import ComparisonStats
from spendio.domain.models.category import Category

from .aggregation import DatedAmount, monthly_stats
from .date_window import current_month, previous_month

STABLE_BAND_PCT = 5.0


def percentage_change(current: float, previous: float) -> float:
    if previous > 0:
        return (current - previous) / previous * 100
    return 100.0 if current > 0 else 0.0


def classify_trend(change: float) -> Trend:
    if abs(change) < STABLE_BAND_PCT:
        return Trend.STABLE
    return Trend.UP if change > 0 else Trend.DOWN


def compare_months(
    records: Sequence[DatedAmount],
    categories: Sequence[Category],
    month: str | None = None,
    *,
    now: datetime | None = None,
) -> ComparisonStats:
    target = month or current_month(now)
    current = monthly_stats(records, categories, target)
    previous = monthly_stats(records, categories, previous_month(target))
    change = percentage_change(current.total, previous.total)
    return ComparisonStats(
        current_month=current,
        previous_month=previous,
        percentage_change=change,
        trend=classify_trend(change).value,
    )
