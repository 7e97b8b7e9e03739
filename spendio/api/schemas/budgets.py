from __future__ import annotations

from pydantic import Field

from spendio.api.schemas.common import RequestModel, UpdateModel


class BudgetUpsertPayload(RequestModel):
    category_id: str = Field(min_length=1)
    month: str = Field(pattern=r"^\d{4}-\d{2}$")
    amount: float = Field(ge=0)
    rollover: bool = False


class BudgetUpdatePayload(UpdateModel):
    amount: float | None = Field(default=None, ge=0)
    rollover: bool | None = None
