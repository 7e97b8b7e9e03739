from __future__ import annotations

from dataclasses import dataclass

from spendio.domain.enums import AccountCategory

from .base import Record, to_float


@dataclass(slots=True)
class Account(Record):
    id: str
    name: str
    category: str = AccountCategory.OTHER.value
    opening_balance: float = 0.0
    balance: float = 0.0
    currency: str = "USD"
    color: str = "#94A3B8"
    icon: str = "wallet"
    is_active: bool = True
    is_default: bool = False
    sort_order: int = 0
    outstanding_balance: float | None = None
    created_at: int = 0
    updated_at: int = 0

    def __post_init__(self) -> None:
        self.category = AccountCategory(self.category).value
        self.opening_balance = to_float(self.opening_balance)
        self.balance = to_float(self.balance)
        if self.outstanding_balance is not None:
            self.outstanding_balance = to_float(self.outstanding_balance)
