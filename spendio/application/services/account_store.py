from __future__ import annotations

import dataclasses
from typing import Any

from spendio.domain.enums import AccountCategory, BalanceDirection
from spendio.domain.models.account import Account
from spendio.domain.ports import storage_keys

from .entity_store import EntityStore


class AccountStore(EntityStore[Account]):
    record_type = Account
    storage_key = storage_keys.ACCOUNTS

    def add(self, data: dict[str, Any]) -> Account:
        with self._lock:
            payload = dict(data)
            payload["sort_order"] = len(self._records)
            payload.setdefault("balance", payload.get("opening_balance", 0.0))
            record = self.build(payload)
            others = self._records
            if record.is_default:
                others = [dataclasses.replace(a, is_default=False) for a in others]
            self._commit([*others, record])
            self._log.debug(f"added id={record.id}")
            return record

    def update(self, record_id: str, changes: dict[str, Any]) -> Account | None:
        with self._lock:
            self._check_fields(changes)
            if self.get_by_id(record_id) is None:
                return None
            clear_others = changes.get("is_default") is True
            accounts = [
                self._patched(a, changes) if a.id == record_id
                else dataclasses.replace(a, is_default=False) if clear_others
                else a
                for a in self._records
            ]
            self._commit(accounts)
            return self.get_by_id(record_id)

    def set_default(self, record_id: str) -> Account | None:
        with self._lock:
            if self.get_by_id(record_id) is None:
                return None
            now = self.clock()
            accounts = [
                dataclasses.replace(a, is_default=True, updated_at=now)
                if a.id == record_id
                else dataclasses.replace(a, is_default=False)
                for a in self._records
            ]
            self._commit(accounts)
            return self.get_by_id(record_id)

    def get_default(self) -> Account | None:
        return next((a for a in self._records if a.is_default and a.is_active), None)

    def toggle_active(self, record_id: str) -> Account | None:
        account = self.get_by_id(record_id)
        if account is None:
            return None
        return self.update(record_id, {"is_active": not account.is_active})

    def reorder(self, ordered_ids: list[str]) -> list[Account]:
        """Rewrite ``sort_order`` from ``ordered_ids``; accounts not listed are dropped."""
        with self._lock:
            by_id = {a.id: a for a in self._records}
            now = self.clock()
            reordered = [
                dataclasses.replace(by_id[aid], sort_order=index, updated_at=now)
                for index, aid in enumerate(ordered_ids)
                if aid in by_id
            ]
            self._commit(reordered)
            return self.list_all()

    def active(self) -> list[Account]:
        return sorted((a for a in self._records if a.is_active), key=lambda a: a.sort_order)

    def by_category(self, category: AccountCategory | str) -> list[Account]:
        wanted = AccountCategory(category).value
        return sorted((a for a in self._records if a.category == wanted), key=lambda a: a.sort_order)

    def adjust_balance(
        self,
        record_id: str,
        amount: float,
        direction: BalanceDirection | str,
    ) -> Account | None:
        with self._lock:
            account = self.get_by_id(record_id)
            if account is None:
                self._log.warning(f"balance adjustment skipped; unknown account id={record_id}")
                return None
            delta = amount if BalanceDirection(direction) is BalanceDirection.ADD else -amount
            return super().update(record_id, {"balance": account.balance + delta})

    def total_balance(self) -> float:
        total = 0.0
        for account in self._records:
            if not account.is_active:
                continue
            # credit cards count their outstanding balance as debt
            if account.category == AccountCategory.CREDIT_CARD:
                total -= account.outstanding_balance or 0.0
            else:
                total += account.balance
        return total

    def balance_by_category(self, category: AccountCategory | str) -> float:
        wanted = AccountCategory(category).value
        return sum(
            (a.balance for a in self._records if a.category == wanted and a.is_active),
            0.0,
        )
