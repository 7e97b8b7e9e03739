from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from spendio.api.dependencies import ApiContext, get_ctx, get_date_filter
from spendio.api.schemas.common import ok
from spendio.application.services import aggregation
from spendio.application.services.comparison import compare_months
from spendio.application.services.date_window import current_month, month_interval, parse_day, resolve_interval
from spendio.domain.errors import ValidationError
from spendio.domain.models.filters import DateFilter
from spendio.logger import current_request_id

router = APIRouter(prefix="/analytics", tags=["analytics"])

_MONTH = r"^\d{4}-\d{2}$"


@router.get("/expenses/total")
def expense_total(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    date_filter: Annotated[DateFilter, Depends(get_date_filter)],
) -> dict:
    interval = resolve_interval(date_filter)
    return ok(
        {"total": aggregation.total(ctx.expenses.list_all(), interval), "period": date_filter.type},
        request_id=current_request_id(),
    )


@router.get("/expenses/daily")
def expense_daily(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
    month: str | None = Query(default=None, pattern=_MONTH),
) -> dict:
    if start or end:
        first, last = parse_day(start), parse_day(end)
        if first is None or last is None or first > last:
            raise ValidationError("start and end must be valid days with start <= end")
    else:
        window = month_interval(month or current_month())
        first, last = window.start.date(), window.end.date()
    rows = aggregation.daily_totals(ctx.expenses.list_all(), first, last)
    return ok([r.to_dict() for r in rows], request_id=current_request_id())


@router.get("/expenses/breakdown")
def expense_breakdown(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    date_filter: Annotated[DateFilter, Depends(get_date_filter)],
) -> dict:
    rows = aggregation.category_breakdown(
        ctx.expenses.list_all(),
        ctx.categories.list_all(),
        resolve_interval(date_filter),
    )
    return ok([r.to_dict() for r in rows], request_id=current_request_id())


@router.get("/expenses/monthly")
def expense_monthly(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    month: str | None = Query(default=None, pattern=_MONTH),
) -> dict:
    stats = aggregation.monthly_stats(
        ctx.expenses.list_all(),
        ctx.categories.list_all(),
        month or current_month(),
    )
    return ok(stats.to_dict(), request_id=current_request_id())


@router.get("/expenses/comparison")
def expense_comparison(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    month: str | None = Query(default=None, pattern=_MONTH),
) -> dict:
    stats = compare_months(ctx.expenses.list_all(), ctx.categories.list_all(), month)
    return ok(stats.to_dict(), request_id=current_request_id())


@router.get("/incomes/total")
def income_total(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    date_filter: Annotated[DateFilter, Depends(get_date_filter)],
) -> dict:
    interval = resolve_interval(date_filter)
    return ok(
        {"total": ctx.incomes.total(interval), "period": date_filter.type},
        request_id=current_request_id(),
    )


@router.get("/incomes/breakdown")
def income_breakdown(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    date_filter: Annotated[DateFilter, Depends(get_date_filter)],
) -> dict:
    rows = aggregation.category_breakdown(
        ctx.incomes.list_all(),
        ctx.income_categories.list_all(),
        resolve_interval(date_filter),
    )
    return ok([r.to_dict() for r in rows], request_id=current_request_id())


@router.get("/incomes/monthly")
def income_monthly(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    month: str | None = Query(default=None, pattern=_MONTH),
) -> dict:
    stats = aggregation.monthly_stats(
        ctx.incomes.list_all(),
        ctx.income_categories.list_all(),
        month or current_month(),
    )
    return ok(stats.to_dict(), request_id=current_request_id())
