from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base import Record


@dataclass(slots=True)
class ValidationResult(Record):
    is_valid: bool
    error: str | None = None
    value: Any = None

    @classmethod
    def ok(cls, value: Any = None) -> "ValidationResult":
        return cls(is_valid=True, value=value)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)
