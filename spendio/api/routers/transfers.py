from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from spendio.api.dependencies import ApiContext, get_ctx
from spendio.api.schemas.common import ok
from spendio.api.schemas.entries import TransferCreatePayload, TransferUpdatePayload
from spendio.domain.errors import NotFoundError
from spendio.domain.validators import require_valid, validate_date
from spendio.logger import current_request_id

router = APIRouter(tags=["transfers"])


def _with_checked_date(changes: dict) -> dict:
    if "date" in changes:
        changes["date"] = require_valid(validate_date(changes["date"]), "date")
    return changes


@router.get("/transfers")
def list_transfers(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    month: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}$"),
    account_id: str | None = Query(default=None, alias="accountId"),
) -> dict:
    if month:
        rows = ctx.transfers.for_month(month)
    else:
        rows = ctx.transfers.list_all()
    if account_id:
        rows = [t for t in rows if account_id in (t.from_account_id, t.to_account_id)]
    return ok([t.to_dict() for t in rows], request_id=current_request_id(), meta={"count": len(rows)})


@router.post("/transfers", status_code=201)
def create_transfer(payload: TransferCreatePayload, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    transfer = ctx.ledger.record(_with_checked_date(payload.changes()))
    return ok(transfer.to_dict(), request_id=current_request_id())


@router.get("/transfers/{transfer_id}")
def get_transfer(transfer_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    transfer = ctx.transfers.get_by_id(transfer_id)
    if transfer is None:
        raise NotFoundError("transfer not found", details={"id": transfer_id})
    return ok(transfer.to_dict(), request_id=current_request_id())


@router.put("/transfers/{transfer_id}")
def update_transfer(
    transfer_id: str,
    payload: TransferUpdatePayload,
    ctx: Annotated[ApiContext, Depends(get_ctx)],
) -> dict:
    transfer = ctx.ledger.edit(transfer_id, _with_checked_date(payload.changes()))
    if transfer is None:
        raise NotFoundError("transfer not found", details={"id": transfer_id})
    return ok(transfer.to_dict(), request_id=current_request_id())


@router.delete("/transfers/{transfer_id}")
def delete_transfer(transfer_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    removed = ctx.ledger.remove(transfer_id)
    if removed is None:
        raise NotFoundError("transfer not found", details={"id": transfer_id})
    return ok(removed.to_dict(), request_id=current_request_id())
