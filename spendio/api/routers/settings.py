from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from spendio.api.dependencies import ApiContext, get_ctx
from spendio.api.schemas.common import ok
from spendio.api.schemas.settings import SettingsUpdatePayload
from spendio.logger import current_request_id

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
def get_settings(ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    return ok(ctx.app_settings.get().to_dict(), request_id=current_request_id())


@router.put("")
def update_settings(payload: SettingsUpdatePayload, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    updated = ctx.app_settings.update(**payload.changes())
    return ok(updated.to_dict(), request_id=current_request_id())


@router.post("/reset")
def reset_settings(ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    return ok(ctx.app_settings.reset().to_dict(), request_id=current_request_id())


@router.get("/onboarding")
def onboarding_state(ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    return ok({"complete": ctx.app_settings.is_onboarding_complete()}, request_id=current_request_id())


@router.post("/onboarding/complete")
def complete_onboarding(ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    ctx.app_settings.complete_onboarding()
    return ok({"complete": True}, request_id=current_request_id())
