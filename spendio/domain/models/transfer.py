from __future__ import annotations

from dataclasses import dataclass

from .base import Record, to_float


@dataclass(slots=True)
class Transfer(Record):
    id: str
    amount: float
    date: str
    # Legacy free-text account kinds (cash/bank/wallet/credit_card); they carry no balance.
    from_account: str | None = None
    to_account: str | None = None
    from_account_id: str | None = None
    to_account_id: str | None = None
    note: str = ""
    created_at: int = 0
    updated_at: int = 0

    def __post_init__(self) -> None:
        self.amount = to_float(self.amount)
        self.note = str(self.note or "")
