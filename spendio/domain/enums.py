from __future__ import annotations

from enum import StrEnum


class DateFilterType(StrEnum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"
    ALL = "all"


class Trend(StrEnum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class SortField(StrEnum):
    DATE = "date"
    AMOUNT = "amount"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class AccountCategory(StrEnum):
    CASH = "cash"
    BANK = "bank"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    UPI = "upi"
    WALLET = "wallet"
    OTHER = "other"


class LegacyAccountType(StrEnum):
    CASH = "cash"
    BANK = "bank"
    WALLET = "wallet"
    CREDIT_CARD = "credit_card"


class PaymentMethod(StrEnum):
    CASH = "cash"
    BANK = "bank"
    WALLET = "wallet"
    UPI = "upi"
    CHEQUE = "cheque"
    OTHER = "other"


class RecurringFrequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class BalanceDirection(StrEnum):
    ADD = "add"
    SUBTRACT = "subtract"


class ThemeMode(StrEnum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class RestoreMode(StrEnum):
    MERGE = "merge"
    REPLACE = "replace"


class ExportFormat(StrEnum):
    CSV = "csv"
    JSON = "json"
