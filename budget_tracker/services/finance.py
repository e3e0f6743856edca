from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from budget_tracker.core.config import Settings
from budget_tracker.db.storage import TransactionRepository, get_repository
from budget_tracker.models.report import DashboardSummary, MonthlyBucket, TrendData
from budget_tracker.models.transaction import (
    CategoryTotals,
    SortField,
    SortOrder,
    StoreResult,
    Transaction,
    TransactionCreate,
    TransactionType,
)
from budget_tracker.services.categories import CategoryRegistry
from budget_tracker.services.store import TransactionStore
from budget_tracker.utils.analyzer import FinanceAnalyzer
from budget_tracker.utils.sorter import sort_transactions
from budget_tracker.utils.trends import TrendAnalyzer


class FinanceService:
    """
    Entry point for everything the API exposes. One instance is built at
    startup and handed to routers through dependency injection.
    """

    def __init__(
        self,
        repository: TransactionRepository,
        analyzer: Optional[FinanceAnalyzer] = None,
        categories: Optional[CategoryRegistry] = None,
    ) -> None:
        self.store = TransactionStore(repository)
        self.analyzer = analyzer or FinanceAnalyzer()
        self.trends = TrendAnalyzer(self.analyzer)
        self.categories = categories or CategoryRegistry()
        self.repository = repository

    @classmethod
    def from_settings(cls, settings: Settings) -> "FinanceService":
        analyzer = FinanceAnalyzer(ZoneInfo(settings.TIMEZONE))
        return cls(get_repository(settings), analyzer=analyzer)

    def load(self) -> Optional[str]:
        warning = self.store.load()
        for tx in self.store.list():
            self._contribute(tx.type, tx.category)
        return warning

    def _contribute(self, tx_type: TransactionType, category: str) -> None:
        # any label is accepted on a transaction; only non-blank ones are registered
        if category.strip():
            self.categories.add(tx_type, category)

    # Commands

    def add_transaction(self, fields: TransactionCreate) -> StoreResult:
        self._contribute(fields.type, fields.category)
        return self.store.add(fields)

    def delete_transaction(self, transaction_id: str) -> StoreResult:
        return self.store.remove(transaction_id)

    def replace_transaction(self, transaction_id: str, fields: TransactionCreate) -> Optional[StoreResult]:
        result = self.store.replace(transaction_id, fields)
        if result is not None:
            self._contribute(fields.type, fields.category)
        return result

    # Queries

    def snapshot(self) -> Tuple[Transaction, ...]:
        return self.store.list()

    def list_transactions(
        self,
        tx_type: Optional[TransactionType] = None,
        sort_by: Optional[SortField] = None,
        order: SortOrder = SortOrder.DESC,
    ) -> List[Transaction]:
        transactions = self.analyzer.filter_by_type(self.snapshot(), tx_type)
        if sort_by is None:
            return transactions
        return sort_transactions(transactions, sort_by, order)

    def get_total(self, tx_type: TransactionType) -> float:
        return self.analyzer.total(self.snapshot(), tx_type)

    def get_category_totals(self, tx_type: TransactionType) -> CategoryTotals:
        return self.analyzer.category_totals(self.snapshot(), tx_type)

    def get_monthly_data(self, limit: Optional[int] = None) -> List[MonthlyBucket]:
        buckets = self.analyzer.monthly_data(self.snapshot())
        return buckets[:limit] if limit else buckets

    def get_trend_data(
        self,
        tx_type: TransactionType,
        months_back: int,
        now: Optional[datetime] = None,
    ) -> TrendData:
        return self.trends.trend(self.snapshot(), tx_type, months_back, now)

    def dashboard(self, now: Optional[datetime] = None) -> DashboardSummary:
        snapshot = self.snapshot()
        return DashboardSummary(
            totals={tx_type.value: self.analyzer.total(snapshot, tx_type) for tx_type in TransactionType},
            balance=self.analyzer.balance(snapshot),
            trends={tx_type.value: self.trends.trend(snapshot, tx_type, 1, now) for tx_type in TransactionType},
            balance_trend=self.trends.balance_trend(snapshot, 1, now),
        )
