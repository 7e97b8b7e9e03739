from __future__ import annotations

EXPENSES = "expenses"
INCOMES = "incomes"
TRANSFERS = "transfers"
ACCOUNTS = "accounts"
CATEGORIES = "categories"
INCOME_CATEGORIES = "income_categories"
BUDGETS = "budgets"
SETTINGS = "app_settings"
ONBOARDING_COMPLETE = "onboarding_complete"
