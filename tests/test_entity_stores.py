import unittest
from datetime import datetime
from itertools import count

from spendio.application.services.account_store import AccountStore
from spendio.application.services.budget_store import BudgetStore
from spendio.application.services.category_store import CategoryStore, IncomeCategoryStore
from spendio.application.services.expense_store import ExpenseStore
from spendio.application.services.income_store import IncomeStore
from spendio.application.services.settings_store import SettingsStore
from spendio.application.services.transfer_store import TransferStore
from spendio.domain.errors import PersistenceError
from spendio.domain.models.filters import DateFilter, ExpenseFilters
from spendio.domain.ports import storage_keys
from spendio.infrastructure.persistence.memory import InMemoryKeyValueStore


def ids(prefix: str):
    seq = count(1)
    return lambda: f"{prefix}{next(seq)}"


class FailingKeyValueStore(InMemoryKeyValueStore):
    def __init__(self) -> None:
        super().__init__()
        self.fail_writes = False

    def set(self, key, value) -> None:
        if self.fail_writes:
            raise PersistenceError(f"failed to write {key}")
        super().set(key, value)


class ExpenseStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.kv = InMemoryKeyValueStore()
        self.store = ExpenseStore(self.kv, clock=lambda: 1000, id_factory=ids("e"))
        self.store.load()

    def test_crud_persists_whole_collection(self) -> None:
        created = self.store.add({"category_id": "food", "amount": 12, "date": "2024-03-01", "note": "lunch"})
        self.assertEqual(created.id, "e1")
        self.assertEqual(created.created_at, 1000)
        self.assertEqual(self.kv.get(storage_keys.EXPENSES)[0]["categoryId"], "food")

        updated = self.store.update("e1", {"amount": 15, "id": "hijack", "created_at": 5})
        self.assertEqual(updated.amount, 15)
        self.assertEqual(updated.id, "e1")
        self.assertEqual(updated.created_at, 1000)

        self.assertIsNone(self.store.update("missing", {"amount": 1}))
        self.assertIsNone(self.store.get_by_id("missing"))
        self.assertEqual(self.store.delete("e1").id, "e1")
        self.assertIsNone(self.store.delete("e1"))
        self.assertEqual(self.kv.get(storage_keys.EXPENSES), [])

    def test_unknown_fields_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.store.add({"category_id": "food", "amount": 1, "date": "2024-03-01", "colour": "red"})

    def test_load_skips_unreadable_rows(self) -> None:
        kv = InMemoryKeyValueStore(
            {
                storage_keys.EXPENSES: [
                    {"id": "ok", "categoryId": "food", "amount": 3, "date": "2024-03-01"},
                    {"id": "broken"},
                    "not-a-row",
                ]
            }
        )
        store = ExpenseStore(kv)
        self.assertEqual([e.id for e in store.load()], ["ok"])

    def test_import_and_replace(self) -> None:
        self.store.add({"category_id": "food", "amount": 1, "date": "2024-03-01"})
        added = self.store.import_records(
            [
                {"id": "e1", "categoryId": "rent", "amount": 999, "date": "2024-03-01"},
                {"id": "x1", "categoryId": "rent", "amount": 5, "date": "2024-03-02"},
            ]
        )
        self.assertEqual(added, 1)
        self.assertEqual(self.store.get_by_id("e1").amount, 1)
        self.assertEqual(self.store.replace_all([]), 0)
        self.assertEqual(self.store.count(), 0)

    def test_failed_write_leaves_memory_unchanged(self) -> None:
        kv = FailingKeyValueStore()
        store = ExpenseStore(kv)
        store.load()
        store.add({"category_id": "food", "amount": 1, "date": "2024-03-01"})
        kv.fail_writes = True
        with self.assertRaises(PersistenceError):
            store.add({"category_id": "food", "amount": 2, "date": "2024-03-02"})
        with self.assertRaises(PersistenceError):
            store.clear_all()
        self.assertEqual(store.count(), 1)

    def test_filter(self) -> None:
        rows = [
            ("food", 10, "2024-03-01", "Coffee beans"),
            ("food", 40, "2024-03-10", "Dinner"),
            ("rent", 900, "2024-03-02", ""),
            ("food", 5, "2024-02-28", "coffee"),
        ]
        for category_id, amount, day, note in rows:
            self.store.add({"category_id": category_id, "amount": amount, "date": day, "note": note})
        now = datetime(2024, 3, 15)

        month = self.store.filter(ExpenseFilters(), now=now)
        self.assertEqual([e.date for e in month], ["2024-03-10", "2024-03-02", "2024-03-01"])

        coffee = self.store.filter(
            ExpenseFilters(date_filter=DateFilter(type="all"), search_query="COFFEE", sort_order="asc"),
            now=now,
        )
        self.assertEqual([e.amount for e in coffee], [5, 10])

        by_amount = self.store.filter(
            ExpenseFilters(
                date_filter=DateFilter(type="all"),
                category_ids=["food"],
                sort_field="amount",
                min_amount=6,
                max_amount=40,
            ),
            now=now,
        )
        self.assertEqual([e.amount for e in by_amount], [40, 10])


class IncomeStoreTests(unittest.TestCase):
    def test_totals(self) -> None:
        store = IncomeStore(InMemoryKeyValueStore())
        store.load()
        store.add({"category_id": "inc-salary", "amount": 1000, "date": "2024-03-01", "payment_method": "bank"})
        store.add({"category_id": "inc-refund", "amount": 50, "date": "2024-03-05"})
        store.add({"category_id": "inc-salary", "amount": 1000, "date": "2024-02-01"})
        self.assertEqual(store.monthly_total("2024-03"), 1050)
        self.assertEqual(store.total(), 2050)
        self.assertEqual(
            store.totals_by_category(),
            [{"categoryId": "inc-salary", "total": 2000.0}, {"categoryId": "inc-refund", "total": 50.0}],
        )
        self.assertEqual([i.date for i in store.for_month("2024-03")], ["2024-03-05", "2024-03-01"])

    def test_enum_fields_validated(self) -> None:
        store = IncomeStore(InMemoryKeyValueStore())
        with self.assertRaises(ValueError):
            store.add({"category_id": "inc-salary", "amount": 1, "date": "2024-03-01", "payment_method": "gold"})


class TransferStoreTests(unittest.TestCase):
    def test_update_and_delete_return_previous(self) -> None:
        store = TransferStore(InMemoryKeyValueStore(), id_factory=ids("t"))
        store.load()
        store.add({"amount": 10, "date": "2024-03-01", "from_account_id": "a", "to_account_id": "b"})
        store.add({"amount": 5, "date": "2024-03-09", "from_account": "bank", "to_account": "cash"})
        previous = store.update("t1", {"amount": 25})
        self.assertEqual(previous.amount, 10)
        self.assertEqual(store.get_by_id("t1").amount, 25)
        self.assertEqual([t.id for t in store.for_month("2024-03")], ["t2", "t1"])
        self.assertEqual([t.id for t in store.for_account("b")], ["t1"])
        self.assertEqual(store.total(), 30)
        self.assertEqual(store.delete("t2").amount, 5)


class CategoryStoreTests(unittest.TestCase):
    def test_seeds_defaults_when_missing_or_empty(self) -> None:
        kv = InMemoryKeyValueStore({storage_keys.CATEGORIES: []})
        store = CategoryStore(kv)
        rows = store.load()
        self.assertEqual(len(rows), 12)
        self.assertTrue(all(c.is_system and c.id.startswith("cat-default-") for c in rows))
        self.assertEqual(len(kv.get(storage_keys.CATEGORIES)), 12)

        income = IncomeCategoryStore(kv)
        self.assertEqual([c.id for c in income.load()][0], "inc-salary")
        self.assertEqual(len(kv.get(storage_keys.INCOME_CATEGORIES)), 6)

    def test_system_categories_survive_delete(self) -> None:
        store = CategoryStore(InMemoryKeyValueStore())
        store.load()
        self.assertFalse(store.delete("cat-default-rent"))
        self.assertFalse(store.delete("missing"))
        self.assertEqual(store.count(), 12)

        custom = store.add({"name": "Pets", "icon": "paw", "color": "#123456", "is_system": True})
        self.assertFalse(custom.is_system)
        self.assertTrue(store.delete(custom.id))
        self.assertEqual(store.count(), 12)

    def test_reset_to_defaults(self) -> None:
        store = CategoryStore(InMemoryKeyValueStore())
        store.load()
        store.add({"name": "Pets"})
        store.update("cat-default-rent", {"name": "Housing", "is_system": False})
        self.assertTrue(store.get_by_id("cat-default-rent").is_system)
        rows = store.reset_to_defaults()
        self.assertEqual(len(rows), 12)
        self.assertEqual(store.get_by_id("cat-default-rent").name, "Rent")


class BudgetStoreTests(unittest.TestCase):
    def test_upsert_on_category_and_month(self) -> None:
        store = BudgetStore(InMemoryKeyValueStore(), id_factory=ids("b"))
        store.load()
        first = store.add({"category_id": "cat-1", "month": "2024-03", "amount": 100})
        second = store.add({"category_id": "cat-1", "month": "2024-03", "amount": 150, "rollover": True})
        self.assertEqual(first.id, second.id)
        self.assertEqual(store.count(), 1)
        self.assertEqual(second.amount, 150)
        self.assertTrue(second.rollover)

        store.add({"category_id": "cat-1", "month": "2024-04", "amount": 100})
        self.assertEqual(store.count(), 2)
        self.assertEqual([b.month for b in store.for_month("2024-04")], ["2024-04"])

    def test_invalid_month_rejected(self) -> None:
        store = BudgetStore(InMemoryKeyValueStore())
        with self.assertRaises(ValueError):
            store.add({"category_id": "cat-1", "month": "March", "amount": 100})

    def test_missing_amount_is_a_value_error(self) -> None:
        store = BudgetStore(InMemoryKeyValueStore(), id_factory=ids("b"))
        store.load()
        budget = store.add({"category_id": "cat-1", "month": "2024-03", "amount": 100})
        with self.assertRaises(ValueError):
            store.update(budget.id, {"amount": None})
        self.assertEqual(store.get_by_id(budget.id).amount, 100)


class AccountStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = AccountStore(InMemoryKeyValueStore(), id_factory=ids("a"))
        self.store.load()

    def test_sort_order_and_single_default(self) -> None:
        a1 = self.store.add({"name": "Wallet", "category": "cash", "opening_balance": 50, "is_default": True})
        a2 = self.store.add({"name": "Bank", "category": "bank", "opening_balance": 500, "is_default": True})
        self.assertEqual((a1.sort_order, a2.sort_order), (0, 1))
        self.assertEqual(a2.balance, 500)
        self.assertFalse(self.store.get_by_id("a1").is_default)
        self.assertEqual(self.store.get_default().id, "a2")

        self.store.update("a1", {"is_default": True})
        self.assertEqual(self.store.get_default().id, "a1")
        self.store.set_default("a2")
        self.assertEqual([a.id for a in self.store.list_all() if a.is_default], ["a2"])
        self.assertIsNone(self.store.set_default("missing"))

    def test_active_reorder_and_balances(self) -> None:
        self.store.add({"name": "Wallet", "category": "cash", "opening_balance": 50})
        self.store.add({"name": "Bank", "category": "bank", "opening_balance": 500})
        self.store.add({"name": "Card", "category": "credit_card", "outstanding_balance": 120})
        self.assertEqual(self.store.total_balance(), 430)

        self.store.toggle_active("a1")
        self.assertEqual([a.id for a in self.store.active()], ["a2", "a3"])
        self.assertEqual(self.store.total_balance(), 380)

        self.store.reorder(["a3", "a1", "a2"])
        self.assertEqual([a.sort_order for a in self.store.list_all()], [0, 1, 2])
        self.assertEqual([a.id for a in self.store.list_all()], ["a3", "a1", "a2"])

        self.store.adjust_balance("a2", 100, "subtract")
        self.store.adjust_balance("a2", 30, "add")
        self.assertEqual(self.store.get_by_id("a2").balance, 430)
        self.assertEqual(self.store.balance_by_category("bank"), 430)
        self.assertEqual([a.id for a in self.store.by_category("credit_card")], ["a3"])
        self.assertIsNone(self.store.adjust_balance("missing", 1, "add"))


class SettingsStoreTests(unittest.TestCase):
    def test_merges_over_defaults(self) -> None:
        kv = InMemoryKeyValueStore({storage_keys.SETTINGS: {"theme": "dark"}})
        store = SettingsStore(kv, default_currency="EUR")
        settings = store.load()
        self.assertEqual(settings.theme, "dark")
        self.assertEqual(settings.currency.code, "EUR")
        self.assertTrue(settings.is_first_launch)

    def test_writes_defaults_when_absent_and_updates(self) -> None:
        kv = InMemoryKeyValueStore()
        store = SettingsStore(kv)
        store.load()
        self.assertEqual(kv.get(storage_keys.SETTINGS)["currency"]["code"], "USD")

        updated = store.update(currency="INR", theme="light")
        self.assertEqual(updated.currency.symbol, "₹")
        self.assertEqual(kv.get(storage_keys.SETTINGS)["theme"], "light")
        with self.assertRaises(ValueError):
            store.update(theme="neon")
        with self.assertRaises(ValueError):
            store.update(font="serif")

        self.assertEqual(store.reset().theme, "system")

    def test_onboarding_flag(self) -> None:
        kv = InMemoryKeyValueStore()
        store = SettingsStore(kv)
        store.load()
        self.assertFalse(store.is_onboarding_complete())
        store.complete_onboarding()
        self.assertTrue(store.is_onboarding_complete())
        self.assertFalse(store.get().is_first_launch)


if __name__ == "__main__":
    unittest.main()
