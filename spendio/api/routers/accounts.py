from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from spendio.api.dependencies import ApiContext, get_ctx
from spendio.api.schemas.accounts import (
    AccountCreatePayload,
    AccountOrderPayload,
    AccountUpdatePayload,
)
from spendio.api.schemas.common import ok
from spendio.domain.enums import AccountCategory
from spendio.domain.errors import NotFoundError
from spendio.logger import current_request_id

router = APIRouter(tags=["accounts"])


def _missing(account_id: str) -> NotFoundError:
    return NotFoundError("account not found", details={"id": account_id})


@router.get("/accounts")
def list_accounts(ctx: Annotated[ApiContext, Depends(get_ctx)], active: bool = False) -> dict:
    rows = ctx.accounts.active() if active else ctx.accounts.list_all()
    return ok([a.to_dict() for a in rows], request_id=current_request_id(), meta={"count": len(rows)})


@router.get("/accounts/summary")
def account_summary(ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    default = ctx.accounts.get_default()
    payload = {
        "totalBalance": ctx.accounts.total_balance(),
        "byCategory": {c.value: ctx.accounts.balance_by_category(c) for c in AccountCategory},
        "defaultAccountId": default.id if default else None,
    }
    return ok(payload, request_id=current_request_id())


@router.put("/accounts/order")
def reorder_accounts(payload: AccountOrderPayload, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    rows = ctx.accounts.reorder(payload.ids)
    return ok([a.to_dict() for a in rows], request_id=current_request_id())


@router.post("/accounts", status_code=201)
def create_account(payload: AccountCreatePayload, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    account = ctx.accounts.add(payload.changes())
    return ok(account.to_dict(), request_id=current_request_id())


@router.get("/accounts/{account_id}")
def get_account(account_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    account = ctx.accounts.get_by_id(account_id)
    if account is None:
        raise _missing(account_id)
    return ok(account.to_dict(), request_id=current_request_id())


@router.put("/accounts/{account_id}")
def update_account(
    account_id: str,
    payload: AccountUpdatePayload,
    ctx: Annotated[ApiContext, Depends(get_ctx)],
) -> dict:
    account = ctx.accounts.update(account_id, payload.changes())
    if account is None:
        raise _missing(account_id)
    return ok(account.to_dict(), request_id=current_request_id())


@router.post("/accounts/{account_id}/default")
def make_default(account_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    account = ctx.accounts.set_default(account_id)
    if account is None:
        raise _missing(account_id)
    return ok(account.to_dict(), request_id=current_request_id())


@router.post("/accounts/{account_id}/toggle-active")
def toggle_active(account_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    account = ctx.accounts.toggle_active(account_id)
    if account is None:
        raise _missing(account_id)
    return ok(account.to_dict(), request_id=current_request_id())


@router.delete("/accounts/{account_id}")
def delete_account(account_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    removed = ctx.accounts.delete(account_id)
    if removed is None:
        raise _missing(account_id)
    return ok(removed.to_dict(), request_id=current_request_id())
