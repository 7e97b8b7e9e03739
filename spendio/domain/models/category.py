from __future__ import annotations

from dataclasses import dataclass

from .base import Record

UNKNOWN_CATEGORY_NAME = "Unknown"
UNKNOWN_CATEGORY_ICON = "help-circle"
UNKNOWN_CATEGORY_COLOR = "#94A3B8"


@dataclass(slots=True)
class Category(Record):
    """Expense or income category. ``is_system`` rows are seeded and never deleted."""

    id: str
    name: str
    icon: str = "dots-horizontal-circle"
    color: str = "#95A5A6"
    is_system: bool = False
    created_at: int = 0
    updated_at: int = 0
