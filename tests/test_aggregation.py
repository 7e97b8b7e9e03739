import unittest
from datetime import date

from spendio.application.services import aggregation
from spendio.application.services.date_window import month_interval
from spendio.domain.models.category import Category
from spendio.domain.models.expense import Expense

CATEGORIES = [
    Category(id="food", name="Food", icon="food", color="#f00"),
    Category(id="rent", name="Rent", icon="home", color="#0f0"),
    Category(id="fun", name="Fun", icon="movie", color="#00f"),
]


def expense(eid: str, category_id: str, amount: float, day: str) -> Expense:
    return Expense(id=eid, category_id=category_id, amount=amount, date=day)


class CategoryBreakdownTests(unittest.TestCase):
    def setUp(self) -> None:
        self.records = [
            expense("1", "fun", 30, "2024-03-02"),
            expense("2", "food", 30, "2024-03-03"),
            expense("3", "rent", 100, "2024-03-01"),
            expense("4", "food", 10, "2024-03-05"),
            expense("5", "ghost", 999, "2024-03-05"),
            expense("6", "fun", 10, "2024-03-06"),
        ]

    def test_sorted_by_total_with_ties_in_encounter_order(self) -> None:
        rows = aggregation.category_breakdown(self.records, CATEGORIES)
        self.assertEqual([r.category_id for r in rows], ["rent", "fun", "food"])
        self.assertEqual([r.count for r in rows], [1, 2, 2])

    def test_repeatable_output(self) -> None:
        first = [r.to_dict() for r in aggregation.category_breakdown(self.records, CATEGORIES)]
        second = [r.to_dict() for r in aggregation.category_breakdown(self.records, CATEGORIES)]
        self.assertEqual(first, second)

    def test_orphaned_categories_dropped(self) -> None:
        rows = aggregation.category_breakdown(self.records, CATEGORIES)
        self.assertNotIn("ghost", [r.category_id for r in rows])

    def test_percentages_sum_to_hundred_without_orphans(self) -> None:
        known = [r for r in self.records if r.category_id != "ghost"]
        rows = aggregation.category_breakdown(known, CATEGORIES)
        self.assertAlmostEqual(sum(r.percentage for r in rows), 100.0, places=9)

    def test_interval_scopes_records(self) -> None:
        records = [*self.records, expense("7", "rent", 500, "2024-04-01")]
        rows = aggregation.category_breakdown(records, CATEGORIES, month_interval("2024-03"))
        self.assertEqual(rows[0].total, 100)

    def test_empty_input(self) -> None:
        self.assertEqual(aggregation.category_breakdown([], CATEGORIES), [])


class DailyTotalsTests(unittest.TestCase):
    def test_one_entry_per_day_zero_filled(self) -> None:
        records = [
            expense("1", "food", 5, "2024-04-02"),
            expense("2", "food", 7, "2024-04-02"),
            expense("3", "food", 1, "2024-04-30"),
        ]
        rows = aggregation.daily_totals(records, date(2024, 4, 1), date(2024, 4, 30))
        self.assertEqual(len(rows), 30)
        self.assertEqual(rows[0].total, 0.0)
        self.assertEqual(rows[1].to_dict(), {"date": "2024-04-02", "total": 12.0})
        self.assertEqual(rows[-1].total, 1.0)


class MonthlyStatsTests(unittest.TestCase):
    def test_stats_for_month(self) -> None:
        records = [
            expense("1", "food", 50, "2024-03-01"),
            expense("2", "food", 30, "2024-03-15"),
            expense("3", "rent", 20, "2024-03-20"),
            expense("4", "rent", 1000, "2024-02-20"),
        ]
        stats = aggregation.monthly_stats(records, CATEGORIES, "2024-03")
        self.assertEqual(stats.total, 100)
        self.assertEqual(stats.count, 3)
        self.assertAlmostEqual(stats.average_daily, 100 / 31)
        self.assertEqual(stats.highest_category.category_id, "food")
        self.assertEqual(len(stats.daily_totals), 31)
        payload = stats.to_dict()
        self.assertEqual(payload["highestCategory"]["categoryName"], "Food")
        self.assertEqual(payload["categoryBreakdown"][1]["categoryId"], "rent")

    def test_highest_category_tie_goes_to_later_entry(self) -> None:
        records = [
            expense("1", "rent", 40, "2024-03-01"),
            expense("2", "food", 40, "2024-03-02"),
            expense("3", "fun", 5, "2024-03-03"),
        ]
        stats = aggregation.monthly_stats(records, CATEGORIES, "2024-03")
        self.assertEqual([c.category_id for c in stats.category_breakdown], ["rent", "food", "fun"])
        self.assertEqual(stats.highest_category.category_id, "food")

    def test_empty_month(self) -> None:
        stats = aggregation.monthly_stats([], CATEGORIES, "2024-02")
        self.assertEqual(stats.total, 0)
        self.assertIsNone(stats.highest_category)
        self.assertEqual(len(stats.daily_totals), 29)


if __name__ == "__main__":
    unittest.main()
