from __future__ import annotations

from dataclasses import dataclass, field

from .base import Record


@dataclass(slots=True)
class DailyTotal(Record):
    date: str
    total: float


@dataclass(slots=True)
class CategoryTotal(Record):
    category_id: str
    category_name: str
    category_color: str
    category_icon: str
    total: float
    percentage: float
    count: int


@dataclass(slots=True)
class MonthlyStats(Record):
    month: str
    total: float
    count: int
    average_daily: float
    highest_category: CategoryTotal | None
    daily_totals: list[DailyTotal] = field(default_factory=list)
    category_breakdown: list[CategoryTotal] = field(default_factory=list)


@dataclass(slots=True)
class ComparisonStats(Record):
    current_month: MonthlyStats
    previous_month: MonthlyStats
    percentage_change: float
    trend: str


@dataclass(slots=True)
class BudgetWithProgress(Record):
    """A budget joined with its month's spend. ``amount`` is the effective amount."""

    id: str
    month: str
    category_id: str
    amount: float
    rollover: bool
    created_at: int
    updated_at: int
    nominal_amount: float
    rollover_amount: float
    spent: float
    remaining: float
    percentage: float
    is_over_budget: bool
    category_name: str
    category_icon: str
    category_color: str


@dataclass(slots=True)
class BudgetSummary(Record):
    month: str
    total_budget: float
    total_spent: float
    remaining: float
    percentage: float
    over_budget_count: int
