from __future__ import annotations

from typing import Any

from spendio.domain.defaults import default_categories, default_income_categories
from spendio.domain.models.category import Category
from spendio.domain.ports import storage_keys

from .entity_store import EntityStore


class CategoryStore(EntityStore[Category]):
    record_type = Category
    storage_key = storage_keys.CATEGORIES

    def seed(self) -> list[Category]:
        return default_categories()

    def needs_seed(self, raw: Any) -> bool:
        return not raw

    def build(self, data: dict[str, Any]) -> Category:
        return super().build({k: v for k, v in data.items() if k != "is_system"})

    def update(self, record_id: str, changes: dict[str, Any]) -> Category | None:
        return super().update(record_id, {k: v for k, v in changes.items() if k != "is_system"})

    def delete(self, record_id: str) -> bool:  # type: ignore[override]
        """Remove a user category. System categories and unknown ids are refused."""
        with self._lock:
            category = self.get_by_id(record_id)
            if category is None or category.is_system:
                self._log.warning(f"refused delete id={record_id}")
                return False
            super().delete(record_id)
            return True

    def reset_to_defaults(self) -> list[Category]:
        with self._lock:
            self._commit(self.seed())
            return self.list_all()


class IncomeCategoryStore(CategoryStore):
    storage_key = storage_keys.INCOME_CATEGORIES

    def seed(self) -> list[Category]:
        return default_income_categories()
