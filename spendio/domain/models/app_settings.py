from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from spendio.domain.enums import ThemeMode

from .base import Record


@dataclass(frozen=True, slots=True)
class Currency(Record):
    code: str
    symbol: str
    name: str
    decimal_places: int = 2
    symbol_position: str = "before"


CURRENCIES: list[Currency] = [
    Currency("USD", "$", "US Dollar"),
    Currency("EUR", "€", "Euro"),
    Currency("GBP", "£", "British Pound"),
    Currency("JPY", "¥", "Japanese Yen", decimal_places=0),
    Currency("CNY", "¥", "Chinese Yuan"),
    Currency("INR", "₹", "Indian Rupee"),
    Currency("AUD", "A$", "Australian Dollar"),
    Currency("CAD", "C$", "Canadian Dollar"),
    Currency("CHF", "CHF", "Swiss Franc"),
    Currency("KRW", "₩", "South Korean Won", decimal_places=0),
    Currency("SGD", "S$", "Singapore Dollar"),
    Currency("SEK", "kr", "Swedish Krona", symbol_position="after"),
    Currency("NOK", "kr", "Norwegian Krone", symbol_position="after"),
    Currency("BRL", "R$", "Brazilian Real"),
]


def currency_by_code(code: str) -> Currency:
    wanted = str(code or "").strip().upper()
    for currency in CURRENCIES:
        if currency.code == wanted:
            return currency
    return CURRENCIES[0]


@dataclass(slots=True)
class AppSettings(Record):
    theme: str = ThemeMode.SYSTEM.value
    currency: Currency = field(default_factory=lambda: CURRENCIES[0])
    last_backup_time: int | None = None
    is_first_launch: bool = True
    auto_backup_enabled: bool = False

    def __post_init__(self) -> None:
        self.theme = ThemeMode(self.theme).value
        if isinstance(self.currency, dict):
            self.currency = Currency.from_dict(self.currency)
        elif isinstance(self.currency, str):
            self.currency = currency_by_code(self.currency)

    @classmethod
    def merged(cls, defaults: "AppSettings", stored: dict[str, Any]) -> "AppSettings":
        base = defaults.to_dict()
        base.update(stored)
        return cls.from_dict(base)
