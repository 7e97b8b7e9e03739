from __future__ import annotations

from dataclasses import dataclass

from spendio.domain.enums import PaymentMethod, RecurringFrequency

from .base import Record, to_float


@dataclass(slots=True)
class Income(Record):
    id: str
    category_id: str
    amount: float
    date: str
    note: str = ""
    payment_method: str = PaymentMethod.CASH.value
    account_id: str | None = None
    is_recurring: bool = False
    recurring_frequency: str | None = None
    created_at: int = 0
    updated_at: int = 0

    def __post_init__(self) -> None:
        self.amount = to_float(self.amount)
        self.note = str(self.note or "")
        self.payment_method = PaymentMethod(self.payment_method).value
        if self.recurring_frequency is not None:
            self.recurring_frequency = RecurringFrequency(self.recurring_frequency).value
