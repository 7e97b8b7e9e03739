from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from spendio.api.dependencies import ApiContext, get_ctx
from spendio.api.schemas.common import ok
from spendio.logger import current_request_id

router = APIRouter(tags=["health"])


@router.get("/health")
def health(ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    return ok({"ok": True, "storage": ctx.settings.storage}, request_id=current_request_id())
