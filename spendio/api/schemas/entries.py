from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from spendio.api.schemas.common import RequestModel, UpdateModel
from spendio.domain.enums import LegacyAccountType, PaymentMethod, RecurringFrequency


class ExpenseCreatePayload(RequestModel):
    category_id: str = Field(min_length=1)
    amount: float | str
    date: str
    note: str = Field(default="", max_length=500)
    account_id: str | None = None


class ExpenseUpdatePayload(UpdateModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"account_id"})

    category_id: str | None = Field(default=None, min_length=1)
    amount: float | str | None = None
    date: str | None = None
    note: str | None = Field(default=None, max_length=500)
    account_id: str | None = None


class IncomeCreatePayload(ExpenseCreatePayload):
    payment_method: PaymentMethod = PaymentMethod.CASH
    is_recurring: bool = False
    recurring_frequency: RecurringFrequency | None = None


class IncomeUpdatePayload(ExpenseUpdatePayload):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"account_id", "recurring_frequency"})

    payment_method: PaymentMethod | None = None
    is_recurring: bool | None = None
    recurring_frequency: RecurringFrequency | None = None


class TransferCreatePayload(RequestModel):
    amount: float | str
    date: str
    from_account: LegacyAccountType | None = None
    to_account: LegacyAccountType | None = None
    from_account_id: str | None = None
    to_account_id: str | None = None
    note: str = Field(default="", max_length=500)


class TransferUpdatePayload(UpdateModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset(
        {"from_account", "to_account", "from_account_id", "to_account_id"}
    )

    amount: float | str | None = None
    date: str | None = None
    from_account: LegacyAccountType | None = None
    to_account: LegacyAccountType | None = None
    from_account_id: str | None = None
    to_account_id: str | None = None
    note: str | None = Field(default=None, max_length=500)
