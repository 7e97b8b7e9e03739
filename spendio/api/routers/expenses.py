from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from spendio.api.dependencies import ApiContext, get_ctx, get_date_filter
from spendio.api.schemas.common import ok
from spendio.api.schemas.entries import (
    ExpenseCreatePayload,
    ExpenseUpdatePayload,
    IncomeCreatePayload,
    IncomeUpdatePayload,
)
from spendio.domain.enums import SortField, SortOrder
from spendio.domain.errors import NotFoundError
from spendio.domain.models.filters import DateFilter, ExpenseFilters
from spendio.domain.validators import require_valid, validate_amount, validate_date
from spendio.logger import current_request_id

router = APIRouter(tags=["entries"])


def checked_entry(changes: dict[str, Any]) -> dict[str, Any]:
    """Normalise amount and date the way the entry forms do; other fields pass through."""
    data = dict(changes)
    if "amount" in data:
        data["amount"] = require_valid(validate_amount(data["amount"]), "amount")
    if "date" in data:
        data["date"] = require_valid(validate_date(data["date"]), "date")
    return data


@router.get("/expenses")
def list_expenses(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    date_filter: Annotated[DateFilter, Depends(get_date_filter)],
    category_id: list[str] | None = Query(default=None),
    q: str = Query(default=""),
    sort: SortField = Query(default=SortField.DATE),
    order: SortOrder = Query(default=SortOrder.DESC),
    min_amount: float | None = Query(default=None, alias="minAmount"),
    max_amount: float | None = Query(default=None, alias="maxAmount"),
) -> dict:
    filters = ExpenseFilters(
        date_filter=date_filter,
        category_ids=category_id or [],
        search_query=q,
        sort_field=sort.value,
        sort_order=order.value,
        min_amount=min_amount,
        max_amount=max_amount,
    )
    rows = ctx.expenses.filter(filters)
    return ok([e.to_dict() for e in rows], request_id=current_request_id(), meta={"count": len(rows)})


@router.post("/expenses", status_code=201)
def create_expense(payload: ExpenseCreatePayload, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    expense = ctx.expenses.add(checked_entry(payload.changes()))
    return ok(expense.to_dict(), request_id=current_request_id())


@router.get("/expenses/{expense_id}")
def get_expense(expense_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    expense = ctx.expenses.get_by_id(expense_id)
    if expense is None:
        raise NotFoundError("expense not found", details={"id": expense_id})
    return ok(expense.to_dict(), request_id=current_request_id())


@router.put("/expenses/{expense_id}")
def update_expense(
    expense_id: str,
    payload: ExpenseUpdatePayload,
    ctx: Annotated[ApiContext, Depends(get_ctx)],
) -> dict:
    expense = ctx.expenses.update(expense_id, checked_entry(payload.changes()))
    if expense is None:
        raise NotFoundError("expense not found", details={"id": expense_id})
    return ok(expense.to_dict(), request_id=current_request_id())


@router.delete("/expenses/{expense_id}")
def delete_expense(expense_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    removed = ctx.expenses.delete(expense_id)
    if removed is None:
        raise NotFoundError("expense not found", details={"id": expense_id})
    return ok(removed.to_dict(), request_id=current_request_id())


@router.get("/incomes")
def list_incomes(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    month: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}$"),
) -> dict:
    rows = ctx.incomes.list_all()
    if month:
        rows = ctx.incomes.for_month(month)
    return ok([i.to_dict() for i in rows], request_id=current_request_id(), meta={"count": len(rows)})


@router.post("/incomes", status_code=201)
def create_income(payload: IncomeCreatePayload, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    income = ctx.incomes.add(checked_entry(payload.changes()))
    return ok(income.to_dict(), request_id=current_request_id())


@router.get("/incomes/{income_id}")
def get_income(income_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    income = ctx.incomes.get_by_id(income_id)
    if income is None:
        raise NotFoundError("income not found", details={"id": income_id})
    return ok(income.to_dict(), request_id=current_request_id())


@router.put("/incomes/{income_id}")
def update_income(
    income_id: str,
    payload: IncomeUpdatePayload,
    ctx: Annotated[ApiContext, Depends(get_ctx)],
) -> dict:
    income = ctx.incomes.update(income_id, checked_entry(payload.changes()))
    if income is None:
        raise NotFoundError("income not found", details={"id": income_id})
    return ok(income.to_dict(), request_id=current_request_id())


@router.delete("/incomes/{income_id}")
def delete_income(income_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    removed = ctx.incomes.delete(income_id)
    if removed is None:
        raise NotFoundError("income not found", details={"id": income_id})
    return ok(removed.to_dict(), request_id=current_request_id())
