from __future__ import annotations

from typing import Annotated, Callable

from fastapi import APIRouter, Depends

from spendio.api.dependencies import ApiContext, get_ctx
from spendio.api.schemas.categories import CategoryCreatePayload, CategoryUpdatePayload
from spendio.api.schemas.common import ok
from spendio.application.services.category_store import CategoryStore
from spendio.domain.errors import NotFoundError, ProtectedEntityError
from spendio.domain.validators import require_valid, validate_category_name
from spendio.logger import current_request_id


def build_category_router(path: str, pick: Callable[[ApiContext], CategoryStore]) -> APIRouter:
    """CRUD routes for one category taxonomy; expense and income categories share them."""
    router = APIRouter(tags=[path.strip("/")])

    @router.get(path)
    def list_categories(ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
        categories = pick(ctx)
        rows = categories.list_all()
        return ok([c.to_dict() for c in rows], request_id=current_request_id(), meta={"count": len(rows)})

    @router.post(path, status_code=201)
    def create_category(
        payload: CategoryCreatePayload,
        ctx: Annotated[ApiContext, Depends(get_ctx)],
    ) -> dict:
        categories = pick(ctx)
        data = payload.changes()
        data["name"] = require_valid(validate_category_name(payload.name), "name")
        return ok(categories.add(data).to_dict(), request_id=current_request_id())

    @router.post(f"{path}/reset")
    def reset_categories(ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
        categories = pick(ctx)
        rows = categories.reset_to_defaults()
        return ok([c.to_dict() for c in rows], request_id=current_request_id())

    @router.put(f"{path}/{{category_id}}")
    def update_category(
        category_id: str,
        payload: CategoryUpdatePayload,
        ctx: Annotated[ApiContext, Depends(get_ctx)],
    ) -> dict:
        categories = pick(ctx)
        data = payload.changes()
        if "name" in data:
            data["name"] = require_valid(validate_category_name(data["name"]), "name")
        category = categories.update(category_id, data)
        if category is None:
            raise NotFoundError("category not found", details={"id": category_id})
        return ok(category.to_dict(), request_id=current_request_id())

    @router.delete(f"{path}/{{category_id}}")
    def delete_category(category_id: str, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
        categories = pick(ctx)
        category = categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("category not found", details={"id": category_id})
        if not categories.delete(category_id):
            raise ProtectedEntityError("system categories cannot be deleted", details={"id": category_id})
        return ok(category.to_dict(), request_id=current_request_id())

    return router


router = build_category_router("/categories", lambda ctx: ctx.categories)
income_router = build_category_router("/income-categories", lambda ctx: ctx.income_categories)
