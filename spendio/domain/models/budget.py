from __future__ import annotations

from dataclasses import dataclass

from .base import Record, to_float


@dataclass(slots=True)
class Budget(Record):
    id: str
    month: str
    category_id: str
    amount: float
    rollover: bool = False
    created_at: int = 0
    updated_at: int = 0

    def __post_init__(self) -> None:
        self.amount = to_float(self.amount)
        self.rollover = bool(self.rollover)
