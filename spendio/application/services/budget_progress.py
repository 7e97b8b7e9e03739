from __future__ import annotations

from typing import Iterable, Sequence

from spendio.domain.models.analytics import BudgetSummary, BudgetWithProgress
from spendio.domain.models.budget import Budget
from spendio.domain.models.category import (
    UNKNOWN_CATEGORY_COLOR,
    UNKNOWN_CATEGORY_ICON,
    UNKNOWN_CATEGORY_NAME,
    Category,
)
from spendio.domain.models.expense import Expense

from .date_window import in_interval, month_interval, previous_month


def spend_by_category(expenses: Iterable[Expense], month: str) -> dict[str, float]:
    interval = month_interval(month)
    spending: dict[str, float] = {}
    for exp in expenses:
        if in_interval(exp.date, interval):
            spending[exp.category_id] = spending.get(exp.category_id, 0.0) + exp.amount
    return spending


def rollover_amount(
    budget: Budget,
    budgets: Sequence[Budget],
    expenses: Sequence[Expense],
) -> float:
    """Unspent remainder of the same category's budget one month back; never chained further."""
    if not budget.rollover:
        return 0.0
    prior_month = previous_month(budget.month)
    prior = next(
        (b for b in budgets if b.month == prior_month and b.category_id == budget.category_id),
        None,
    )
    if prior is None:
        return 0.0
    prior_spent = spend_by_category(expenses, prior_month).get(budget.category_id, 0.0)
    return max(0.0, prior.amount - prior_spent)


def budgets_for_month(
    budgets: Sequence[Budget],
    expenses: Sequence[Expense],
    categories: Sequence[Category],
    month: str,
) -> list[BudgetWithProgress]:
    spending = spend_by_category(expenses, month)
    by_id = {c.id: c for c in categories}

    progress: list[BudgetWithProgress] = []
    for budget in budgets:
        if budget.month != month:
            continue
        category = by_id.get(budget.category_id)
        spent = spending.get(budget.category_id, 0.0)
        carried = rollover_amount(budget, budgets, expenses)
        effective = budget.amount + carried
        progress.append(
            BudgetWithProgress(
                id=budget.id,
                month=budget.month,
                category_id=budget.category_id,
                amount=effective,
                rollover=budget.rollover,
                created_at=budget.created_at,
                updated_at=budget.updated_at,
                nominal_amount=budget.amount,
                rollover_amount=carried,
                spent=spent,
                remaining=effective - spent,
                # zero budgets report 0% instead of dividing by zero
                percentage=(spent / effective * 100) if effective > 0 else 0.0,
                is_over_budget=spent > effective,
                category_name=category.name if category else UNKNOWN_CATEGORY_NAME,
                category_icon=category.icon if category else UNKNOWN_CATEGORY_ICON,
                category_color=category.color if category else UNKNOWN_CATEGORY_COLOR,
            )
        )
    progress.sort(key=lambda item: item.percentage, reverse=True)
    return progress


def total_budget(progress: Iterable[BudgetWithProgress]) -> float:
    return sum((b.amount for b in progress), 0.0)


def total_spent(progress: Iterable[BudgetWithProgress]) -> float:
    return sum((b.spent for b in progress), 0.0)


def over_budget(progress: Iterable[BudgetWithProgress]) -> list[BudgetWithProgress]:
    return [b for b in progress if b.is_over_budget]


def budget_summary(progress: Sequence[BudgetWithProgress], month: str) -> BudgetSummary:
    budget_total = total_budget(progress)
    spent_total = total_spent(progress)
    return BudgetSummary(
        month=month,
        total_budget=budget_total,
        total_spent=spent_total,
        remaining=budget_total - spent_total,
        percentage=(spent_total / budget_total * 100) if budget_total > 0 else 0.0,
        over_budget_count=len(over_budget(progress)),
    )
