from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from spendio.domain.errors import ValidationError
from spendio.domain.models.validation import ValidationResult

MAX_AMOUNT = 999_999_999
CATEGORY_NAME_MIN = 2
CATEGORY_NAME_MAX = 30

_CURRENCY_NOISE = re.compile(r"[,$€£¥₹]")


def validate_amount(amount: Any) -> ValidationResult:
    """Parse a user-entered amount; currency symbols and thousands separators are ignored."""
    if isinstance(amount, bool):
        return ValidationResult.fail("Invalid amount")
    if isinstance(amount, (int, float)):
        value = float(amount)
    else:
        text = str(amount or "").strip()
        if not text:
            return ValidationResult.fail("Amount is required")
        try:
            value = float(_CURRENCY_NOISE.sub("", text))
        except ValueError:
            return ValidationResult.fail("Invalid amount")

    if value != value:
        return ValidationResult.fail("Invalid amount")
    if value <= 0:
        return ValidationResult.fail("Amount must be greater than 0")
    if value > MAX_AMOUNT:
        return ValidationResult.fail("Amount is too large")
    return ValidationResult.ok(value)


def validate_category_name(name: Any) -> ValidationResult:
    trimmed = str(name or "").strip()
    if not trimmed:
        return ValidationResult.fail("Category name is required")
    if len(trimmed) < CATEGORY_NAME_MIN:
        return ValidationResult.fail(f"Name must be at least {CATEGORY_NAME_MIN} characters")
    if len(trimmed) > CATEGORY_NAME_MAX:
        return ValidationResult.fail(f"Name must be less than {CATEGORY_NAME_MAX} characters")
    return ValidationResult.ok(trimmed)


def validate_date(value: Any, *, today: date | None = None) -> ValidationResult:
    text = str(value or "").strip()
    if not text:
        return ValidationResult.fail("Date is required")
    try:
        parsed = datetime.strptime(text[:10], "%Y-%m-%d").date()
    except ValueError:
        return ValidationResult.fail("Invalid date")
    if parsed > (today or date.today()):
        return ValidationResult.fail("Date cannot be in the future")
    return ValidationResult.ok(parsed.isoformat())


def require_valid(result: ValidationResult, field: str) -> Any:
    """Return the normalised value or raise ``ValidationError`` for ``field``."""
    if not result.is_valid:
        raise ValidationError(result.error or "Invalid value", details={"field": field})
    return result.value
