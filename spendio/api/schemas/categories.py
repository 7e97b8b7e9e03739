from __future__ import annotations

from spendio.api.schemas.common import RequestModel, UpdateModel


class CategoryCreatePayload(RequestModel):
    name: str
    icon: str = "dots-horizontal-circle"
    color: str = "#95A5A6"


class CategoryUpdatePayload(UpdateModel):
    name: str | None = None
    icon: str | None = None
    color: str | None = None
