import unittest
from itertools import count

from spendio.application.services import aggregation
from spendio.application.services.account_store import AccountStore
from spendio.application.services.date_window import month_interval
from spendio.application.services.expense_store import ExpenseStore
from spendio.application.services.income_store import IncomeStore
from spendio.application.services.transfer_ledger import TransferLedger
from spendio.application.services.transfer_store import TransferStore
from spendio.domain.errors import PersistenceError, ValidationError
from spendio.domain.ports import storage_keys
from spendio.infrastructure.persistence.memory import InMemoryKeyValueStore


class FlakyKeyValueStore(InMemoryKeyValueStore):
    """Fails every write to one key once armed."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_key: str | None = None

    def set(self, key, value) -> None:
        if key == self.fail_key:
            raise PersistenceError(f"failed to write {key}")
        super().set(key, value)


class TransferLedgerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.kv = FlakyKeyValueStore()
        seq = count(1)
        self.accounts = AccountStore(self.kv, id_factory=lambda: f"a{next(seq)}")
        self.transfers = TransferStore(self.kv)
        self.accounts.load()
        self.transfers.load()
        self.accounts.add({"name": "Bank", "category": "bank", "opening_balance": 1000})
        self.accounts.add({"name": "Wallet", "category": "cash", "opening_balance": 100})
        self.ledger = TransferLedger(self.transfers, self.accounts)

    def balances(self) -> tuple[float, float]:
        return self.accounts.get_by_id("a1").balance, self.accounts.get_by_id("a2").balance

    def test_record_edit_remove_keep_balances_in_step(self) -> None:
        transfer = self.ledger.record(
            {"amount": "$200", "date": "2024-03-01", "from_account_id": "a1", "to_account_id": "a2"}
        )
        self.assertEqual(transfer.amount, 200)
        self.assertEqual(self.balances(), (800, 300))

        edited = self.ledger.edit(transfer.id, {"amount": 50})
        self.assertEqual(edited.amount, 50)
        self.assertEqual(self.balances(), (950, 150))

        swapped = self.ledger.edit(transfer.id, {"from_account_id": "a2", "to_account_id": "a1"})
        self.assertEqual(swapped.from_account_id, "a2")
        self.assertEqual(self.balances(), (1050, 50))

        removed = self.ledger.remove(transfer.id)
        self.assertEqual(removed.id, transfer.id)
        self.assertEqual(self.balances(), (1000, 100))
        self.assertEqual(self.transfers.count(), 0)

    def test_missing_transfer_is_a_no_op(self) -> None:
        self.assertIsNone(self.ledger.edit("nope", {"note": "x"}))
        self.assertIsNone(self.ledger.remove("nope"))
        self.assertEqual(self.balances(), (1000, 100))

    def test_legacy_accounts_carry_no_balance(self) -> None:
        self.ledger.record({"amount": 10, "date": "2024-03-01", "from_account": "bank", "to_account": "cash"})
        self.assertEqual(self.balances(), (1000, 100))
        self.assertEqual(self.transfers.count(), 1)

    def test_invalid_amount_rejected_before_any_write(self) -> None:
        with self.assertRaises(ValidationError):
            self.ledger.record({"amount": 0, "date": "2024-03-01", "from_account_id": "a1"})
        with self.assertRaises(ValidationError):
            self.ledger.edit("anything", {"amount": "-3"})
        self.assertEqual(self.transfers.count(), 0)
        self.assertEqual(self.balances(), (1000, 100))

    def test_failed_balance_write_rolls_back_transfer(self) -> None:
        self.kv.fail_key = storage_keys.ACCOUNTS
        with self.assertRaises(PersistenceError):
            self.ledger.record({"amount": 25, "date": "2024-03-01", "from_account_id": "a1", "to_account_id": "a2"})
        self.kv.fail_key = None
        self.assertEqual(self.transfers.count(), 0)
        self.assertEqual(self.kv.get(storage_keys.TRANSFERS), [])
        self.assertEqual(self.balances(), (1000, 100))

    def test_failed_second_leg_restores_first_leg(self) -> None:
        transfer = self.ledger.record(
            {"amount": 40, "date": "2024-03-01", "from_account_id": "a1", "to_account_id": "a2"}
        )
        original = self.accounts.adjust_balance
        calls = count()

        def flaky_adjust(account_id, amount, direction):
            if next(calls) == 1:
                raise PersistenceError("failed to write accounts")
            return original(account_id, amount, direction)

        self.accounts.adjust_balance = flaky_adjust
        try:
            with self.assertRaises(PersistenceError):
                self.ledger.remove(transfer.id)
        finally:
            del self.accounts.adjust_balance
        self.assertIsNotNone(self.transfers.get_by_id(transfer.id))
        self.assertEqual(self.balances(), (960, 140))
        self.assertEqual([a["balance"] for a in self.kv.get(storage_keys.ACCOUNTS)], [960, 140])

    def test_transfers_do_not_touch_expense_or_income_totals(self) -> None:
        expenses = ExpenseStore(self.kv)
        incomes = IncomeStore(self.kv)
        expenses.load()
        incomes.load()
        expenses.add({"category_id": "food", "amount": 40, "date": "2024-03-04"})
        incomes.add({"category_id": "inc-salary", "amount": 900, "date": "2024-03-01"})
        window = month_interval("2024-03")
        before = (aggregation.total(expenses.list_all(), window), incomes.total(window))
        for n in range(5):
            self.ledger.record(
                {"amount": 10 + n, "date": "2024-03-05", "from_account_id": "a1", "to_account_id": "a2"}
            )
        after = (aggregation.total(expenses.list_all(), window), incomes.total(window))
        self.assertEqual(before, after)


if __name__ == "__main__":
    unittest.main()
