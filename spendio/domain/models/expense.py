from __future__ import annotations

from dataclasses import dataclass

from .base import Record, to_float


@dataclass(slots=True)
class Expense(Record):
    id: str
    category_id: str
    amount: float
    date: str
    note: str = ""
    account_id: str | None = None
    created_at: int = 0
    updated_at: int = 0

    def __post_init__(self) -> None:
        self.amount = to_float(self.amount)
        self.note = str(self.note or "")
