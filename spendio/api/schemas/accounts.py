from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from spendio.api.schemas.common import RequestModel, UpdateModel
from spendio.domain.enums import AccountCategory


class AccountCreatePayload(RequestModel):
    name: str = Field(min_length=1, max_length=50)
    category: AccountCategory = AccountCategory.OTHER
    opening_balance: float = 0.0
    currency: str = Field(default="USD", min_length=3, max_length=3)
    color: str = "#94A3B8"
    icon: str = "wallet"
    is_active: bool = True
    is_default: bool = False
    outstanding_balance: float | None = None


class AccountUpdatePayload(UpdateModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"outstanding_balance"})

    name: str | None = Field(default=None, min_length=1, max_length=50)
    category: AccountCategory | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    color: str | None = None
    icon: str | None = None
    is_active: bool | None = None
    is_default: bool | None = None
    outstanding_balance: float | None = None


class AccountOrderPayload(RequestModel):
    ids: list[str]
