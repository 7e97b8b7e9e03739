from __future__ import annotations

import threading
from typing import Any, Callable, TypeVar

from spendio.domain.enums import BalanceDirection
from spendio.domain.errors import PersistenceError
from spendio.domain.models.transfer import Transfer
from spendio.domain.validators import require_valid, validate_amount
from spendio.logger import get_logger

from .account_store import AccountStore
from .transfer_store import TransferStore

R = TypeVar("R")


class TransferLedger:
    """Applies a transfer and its two balance adjustments as one unit.

    Both collections are snapshotted before the first write and restored
    when any later step raises, so a half-applied transfer is never left
    behind.
    """

    def __init__(self, transfers: TransferStore, accounts: AccountStore) -> None:
        self.transfers = transfers
        self.accounts = accounts
        self._lock = threading.RLock()
        self._log = get_logger().bind(store="transfer_ledger")

    def record(self, data: dict[str, Any]) -> Transfer:
        payload = self._validated(data)
        return self._atomically(lambda: self._record(payload))

    def edit(self, transfer_id: str, changes: dict[str, Any]) -> Transfer | None:
        patch = self._validated(changes) if "amount" in changes else dict(changes)
        return self._atomically(lambda: self._edit(transfer_id, patch))

    def remove(self, transfer_id: str) -> Transfer | None:
        return self._atomically(lambda: self._remove(transfer_id))

    def _record(self, payload: dict[str, Any]) -> Transfer:
        transfer = self.transfers.add(payload)
        self._apply(transfer, reverse=False)
        return transfer

    def _edit(self, transfer_id: str, patch: dict[str, Any]) -> Transfer | None:
        previous = self.transfers.update(transfer_id, patch)
        if previous is None:
            return None
        self._apply(previous, reverse=True)
        current = self.transfers.get_by_id(transfer_id)
        assert current is not None
        self._apply(current, reverse=False)
        return current

    def _remove(self, transfer_id: str) -> Transfer | None:
        removed = self.transfers.delete(transfer_id)
        if removed is None:
            return None
        self._apply(removed, reverse=True)
        return removed

    def _apply(self, transfer: Transfer, *, reverse: bool) -> None:
        debit, credit = BalanceDirection.SUBTRACT, BalanceDirection.ADD
        if reverse:
            debit, credit = credit, debit
        if transfer.from_account_id:
            self.accounts.adjust_balance(transfer.from_account_id, transfer.amount, debit)
        if transfer.to_account_id:
            self.accounts.adjust_balance(transfer.to_account_id, transfer.amount, credit)

    def _atomically(self, step: Callable[[], R]) -> R:
        with self._lock:
            saved_transfers = self.transfers.snapshot()
            saved_accounts = self.accounts.snapshot()
            try:
                return step()
            except Exception as exc:
                self._log.warning(f"transfer failed, restoring transfers and accounts: {exc!r}")
                for store, saved in ((self.transfers, saved_transfers), (self.accounts, saved_accounts)):
                    try:
                        store.restore(saved)
                    except PersistenceError:
                        self._log.exception(f"could not persist restored {store.storage_key}")
                raise

    @staticmethod
    def _validated(data: dict[str, Any]) -> dict[str, Any]:
        return {**data, "amount": require_valid(validate_amount(data.get("amount")), "amount")}
