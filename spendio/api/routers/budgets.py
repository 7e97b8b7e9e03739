from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from spendio.api.dependencies import ApiContext, get_ctx
from spendio.api.schemas.budgets import BudgetUpdatePayload, BudgetUpsertPayload
from spendio.api.schemas.common import ok
from spendio.application.services.budget_progress import budget_summary, budgets_for_month
from spendio.application.services.date_window import current_month
from spendio.domain.errors import NotFoundError
from spendio.logger import current_request_id

router = APIRouter(tags=["budgets"])


def _progress(ctx: ApiContext, month: str):
    return budgets_for_month(
        ctx.budgets.list_all(),
        ctx.expenses.list_all(),
        ctx.categories.list_all(),
        month,
    )


@router.get("/budgets")
def list_budgets(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    month: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}$"),
) -> dict:
    rows = ctx.budgets.for_month(month) if month else ctx.budgets.list_all()
    return ok([b.to_dict() for b in rows], request_id=current_request_id(), meta={"count": len(rows)})


@router.get("/budgets/progress")
def budget_progress(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    month: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}$"),
) -> dict:
    target = month or current_month()
    rows = _progress(ctx, target)
    return ok([b.to_dict() for b in rows], request_id=current_request_id(), meta={"month": target})


@router.get("/budgets/summary")
def budget_month_summary(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    month: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}$"),
) -> dict:
    target = month or current_month()
    summary = budget_summary(_progress(ctx, target), target)
    return ok(summary.to_dict(), request_id=current_request_id())


@router.post("/budgets")
def upsert_budget(payload: BudgetUpsertPayload, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    budget = ctx.budgets.add(payload.changes())
    return ok(budget.to_dict(), request_id=current_request_id())


@router.put("/budgets/{budget_id}")
def update_budget(
    budget_id: str,
    payload: BudgetUpdatePayload,
    ctx: Annotated[ApiContext, Depends(get_ctx)],
) -> dict:
    budget = ctx.budgets.update(budget_id, payload.changes())
    if budget is None:
        raise NotFoundError("budget not found", details={"id": budget_id})
    return ok(budget.to_dict(), request_id=current_request_id())


@router.delete("/budgets/{budget_id}")
def delete_budget(budget_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    removed = ctx.budgets.delete(budget_id)
    if removed is None:
        raise NotFoundError("budget not found", details={"id": budget_id})
    return ok(removed.to_dict(), request_id=current_request_id())
