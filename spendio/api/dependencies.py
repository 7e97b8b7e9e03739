from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import Query, Request

from spendio.application.services.account_store import AccountStore
from spendio.application.services.backup_service import BackupService
from spendio.application.services.budget_store import BudgetStore
from spendio.application.services.category_store import CategoryStore, IncomeCategoryStore
from spendio.application.services.expense_store import ExpenseStore
from spendio.application.services.export_service import ExportService
from spendio.application.services.income_store import IncomeStore
from spendio.application.services.settings_store import SettingsStore
from spendio.application.services.transfer_ledger import TransferLedger
from spendio.application.services.transfer_store import TransferStore
from spendio.domain.enums import DateFilterType
from spendio.domain.models.filters import DateFilter
from spendio.domain.ports.kv_store import KeyValueStorePort
from spendio.infrastructure.persistence.memory import InMemoryKeyValueStore
from spendio.infrastructure.persistence.sqla import SqlaKeyValueStore
from spendio.logger import get_logger
from spendio.settings import Settings, load_settings


@dataclass(slots=True)
class ApiContext:
    root: Path
    settings: Settings
    logger: Any
    kv: KeyValueStorePort
    expenses: ExpenseStore
    incomes: IncomeStore
    transfers: TransferStore
    accounts: AccountStore
    categories: CategoryStore
    income_categories: IncomeCategoryStore
    budgets: BudgetStore
    app_settings: SettingsStore
    ledger: TransferLedger
    backup: BackupService
    exporter: ExportService


def build_kv_store(root: Path, settings: Settings) -> KeyValueStorePort:
    if settings.storage == "memory":
        return InMemoryKeyValueStore()
    return SqlaKeyValueStore(settings.resolve_db_path(root), busy_timeout_s=settings.db_timeout_s)


def build_context(root: Path, *, kv: KeyValueStorePort | None = None) -> ApiContext:
    settings = load_settings()
    logger = get_logger()
    store = kv if kv is not None else build_kv_store(root, settings)

    expenses = ExpenseStore(store)
    incomes = IncomeStore(store)
    transfers = TransferStore(store)
    accounts = AccountStore(store)
    categories = CategoryStore(store)
    income_categories = IncomeCategoryStore(store)
    budgets = BudgetStore(store)
    app_settings = SettingsStore(store, default_currency=settings.currency)
    for loadable in (expenses, incomes, transfers, accounts, categories, income_categories, budgets, app_settings):
        loadable.load()

    backup = BackupService(
        stores={
            "expenses": expenses,
            "incomes": incomes,
            "transfers": transfers,
            "accounts": accounts,
            "categories": categories,
            "incomeCategories": income_categories,
            "budgets": budgets,
        },
        settings=app_settings,
    )
    logger.info(f"stores loaded storage={settings.storage} expenses={expenses.count()}")
    return ApiContext(
        root=root,
        settings=settings,
        logger=logger,
        kv=store,
        expenses=expenses,
        incomes=incomes,
        transfers=transfers,
        accounts=accounts,
        categories=categories,
        income_categories=income_categories,
        budgets=budgets,
        app_settings=app_settings,
        ledger=TransferLedger(transfers, accounts),
        backup=backup,
        exporter=ExportService(expenses, categories, app_settings),
    )


def get_ctx(request: Request) -> ApiContext:
    return request.app.state.ctx


def get_date_filter(
    period: DateFilterType = Query(default=DateFilterType.MONTH),
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
) -> DateFilter:
    return DateFilter(type=period.value, start_date=start, end_date=end)
