from __future__ import annotations

from spendio.domain.models.category import Category

# Static ids keep seeded categories stable across installs and backups.
INITIAL_TIMESTAMP = 1704067200000  # 2024-01-01T00:00:00Z


def _system(category_id: str, name: str, icon: str, color: str) -> Category:
    return Category(
        id=category_id,
        name=name,
        icon=icon,
        color=color,
        is_system=True,
        created_at=INITIAL_TIMESTAMP,
        updated_at=INITIAL_TIMESTAMP,
    )


def default_categories() -> list[Category]:
    return [
        _system("cat-default-food-dining", "Food & Dining", "food-fork-drink", "#FF6B6B"),
        _system("cat-default-transport", "Transport", "car", "#4ECDC4"),
        _system("cat-default-shopping", "Shopping", "shopping", "#45B7D1"),
        _system("cat-default-entertainment", "Entertainment", "movie", "#DDA0DD"),
        _system("cat-default-bills-utilities", "Bills & Utilities", "lightbulb", "#F7DC6F"),
        _system("cat-default-health", "Health", "medical-bag", "#58D68D"),
        _system("cat-default-education", "Education", "school", "#85C1E9"),
        _system("cat-default-rent", "Rent", "home", "#96CEB4"),
        _system("cat-default-personal-care", "Personal Care", "brush", "#BB8FCE"),
        _system("cat-default-groceries", "Groceries", "cart", "#52BE80"),
        _system("cat-default-travel", "Travel", "airplane", "#5499C7"),
        _system("cat-default-other", "Other", "dots-horizontal-circle", "#95A5A6"),
    ]


def default_income_categories() -> list[Category]:
    return [
        _system("inc-salary", "Salary", "briefcase", "#10B981"),
        _system("inc-freelance", "Freelance", "laptop", "#6366F1"),
        _system("inc-business", "Business", "store", "#F59E0B"),
        _system("inc-investment", "Investment", "chart-line", "#3B82F6"),
        _system("inc-refund", "Refund", "cash-refund", "#8B5CF6"),
        _system("inc-other", "Other", "dots-horizontal-circle", "#64748B"),
    ]
