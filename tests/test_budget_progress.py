import unittest

from spendio.application.services.budget_progress import (
    budget_summary,
    budgets_for_month,
    over_budget,
    rollover_amount,
)
from spendio.application.services.budget_store import BudgetStore
from spendio.domain.models.budget import Budget
from spendio.domain.models.category import Category
from spendio.domain.models.expense import Expense
from spendio.infrastructure.persistence.memory import InMemoryKeyValueStore

FOOD = Category(id="cat-1", name="Food", icon="food", color="#f00")


def spend(eid: str, amount: float, day: str, category_id: str = "cat-1") -> Expense:
    return Expense(id=eid, category_id=category_id, amount=amount, date=day)


class BudgetScenarioTests(unittest.TestCase):
    def test_march_progress_then_rollover_from_february(self) -> None:
        store = BudgetStore(InMemoryKeyValueStore())
        store.load()
        expenses = [
            spend("e1", 50, "2024-03-01"),
            spend("e2", 30, "2024-03-15"),
            spend("e3", 20, "2024-02-10"),
        ]

        store.add({"category_id": "cat-1", "month": "2024-03", "amount": 100, "rollover": False})
        [march] = budgets_for_month(store.list_all(), expenses, [FOOD], "2024-03")
        self.assertEqual(march.spent, 80)
        self.assertEqual(march.remaining, 20)
        self.assertEqual(march.percentage, 80)
        self.assertFalse(march.is_over_budget)

        store.add({"category_id": "cat-1", "month": "2024-02", "amount": 50, "rollover": True})
        [feb] = budgets_for_month(store.list_all(), expenses, [FOOD], "2024-02")
        self.assertEqual(feb.remaining, 30)

        store.add({"category_id": "cat-1", "month": "2024-03", "amount": 100, "rollover": True})
        self.assertEqual(store.count(), 2)
        [march] = budgets_for_month(store.list_all(), expenses, [FOOD], "2024-03")
        self.assertEqual(march.nominal_amount, 100)
        self.assertEqual(march.rollover_amount, 30)
        self.assertEqual(march.amount, 130)
        self.assertEqual(march.spent, 80)
        self.assertEqual(march.remaining, 50)
        self.assertAlmostEqual(march.percentage, 61.538, places=2)


class RolloverTests(unittest.TestCase):
    def test_only_one_month_back(self) -> None:
        budgets = [
            Budget(id="b1", month="2024-01", category_id="cat-1", amount=100, rollover=True),
            Budget(id="b2", month="2024-02", category_id="cat-1", amount=100, rollover=True),
            Budget(id="b3", month="2024-03", category_id="cat-1", amount=100, rollover=True),
        ]
        expenses = [spend("e1", 10, "2024-01-05"), spend("e2", 40, "2024-02-05")]
        [march] = budgets_for_month(budgets, expenses, [FOOD], "2024-03")
        # February left 60; January's 90 is not carried through.
        self.assertEqual(march.rollover_amount, 60)
        self.assertEqual(march.amount, 160)

    def test_overspent_prior_month_carries_nothing(self) -> None:
        budgets = [
            Budget(id="b1", month="2024-02", category_id="cat-1", amount=50),
            Budget(id="b2", month="2024-03", category_id="cat-1", amount=100, rollover=True),
        ]
        expenses = [spend("e1", 75, "2024-02-05")]
        self.assertEqual(rollover_amount(budgets[1], budgets, expenses), 0.0)

    def test_missing_prior_budget_or_flag_off(self) -> None:
        current = Budget(id="b2", month="2024-03", category_id="cat-1", amount=100, rollover=True)
        self.assertEqual(rollover_amount(current, [current], []), 0.0)
        prior = Budget(id="b1", month="2024-02", category_id="cat-1", amount=100)
        flag_off = Budget(id="b3", month="2024-03", category_id="cat-1", amount=100)
        self.assertEqual(rollover_amount(flag_off, [prior, flag_off], []), 0.0)


class ProgressEdgeTests(unittest.TestCase):
    def test_zero_budget_with_spend(self) -> None:
        budgets = [Budget(id="b1", month="2024-03", category_id="cat-1", amount=0)]
        [row] = budgets_for_month(budgets, [spend("e1", 5, "2024-03-02")], [FOOD], "2024-03")
        self.assertEqual(row.percentage, 0.0)
        self.assertTrue(row.is_over_budget)
        self.assertEqual(row.remaining, -5)

    def test_sorted_by_percentage_and_unknown_category_placeholder(self) -> None:
        budgets = [
            Budget(id="b1", month="2024-03", category_id="cat-1", amount=100),
            Budget(id="b2", month="2024-03", category_id="gone", amount=10),
            Budget(id="b3", month="2024-02", category_id="cat-1", amount=10),
        ]
        expenses = [spend("e1", 10, "2024-03-02"), spend("e2", 20, "2024-03-03", "gone")]
        rows = budgets_for_month(budgets, expenses, [FOOD], "2024-03")
        self.assertEqual([r.id for r in rows], ["b2", "b1"])
        self.assertEqual(rows[0].category_name, "Unknown")
        self.assertEqual(rows[0].category_icon, "help-circle")
        self.assertEqual(rows[0].category_color, "#94A3B8")
        self.assertEqual([r.id for r in over_budget(rows)], ["b2"])

        summary = budget_summary(rows, "2024-03")
        self.assertEqual(summary.total_budget, 110)
        self.assertEqual(summary.total_spent, 30)
        self.assertEqual(summary.remaining, 80)
        self.assertEqual(summary.over_budget_count, 1)

    def test_empty_summary(self) -> None:
        summary = budget_summary([], "2024-03")
        self.assertEqual(summary.percentage, 0.0)
        self.assertEqual(summary.to_dict()["overBudgetCount"], 0)


if __name__ == "__main__":
    unittest.main()
