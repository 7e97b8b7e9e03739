from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from spendio.api.dependencies import ApiContext, get_ctx, get_date_filter
from spendio.api.schemas.backup import RestorePayload
from spendio.api.schemas.common import ok
from spendio.domain.enums import ExportFormat
from spendio.domain.models.filters import DateFilter
from spendio.logger import current_request_id

router = APIRouter(tags=["backup"])


@router.get("/backup")
def take_backup(ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    return ok(ctx.backup.snapshot(), request_id=current_request_id())


@router.post("/backup/restore")
def restore_backup(payload: RestorePayload, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    counts = ctx.backup.restore(payload.snapshot, payload.mode)
    return ok({"mode": payload.mode.value, "counts": counts}, request_id=current_request_id())


@router.get("/export/expenses")
def export_expenses(
    ctx: Annotated[ApiContext, Depends(get_ctx)],
    date_filter: Annotated[DateFilter, Depends(get_date_filter)],
    fmt: ExportFormat = Query(default=ExportFormat.CSV, alias="format"),
) -> Response:
    exported = ctx.exporter.export_expenses(fmt, date_filter)
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )
