from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence, Tuple

from budget_tracker.models.report import TrendData
from budget_tracker.models.transaction import Transaction, TransactionType
from budget_tracker.utils.analyzer import FinanceAnalyzer


def round_percentage(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def month_start(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def shift_months(start: datetime, months: int) -> datetime:
    """Move a first-of-month instant back by `months` calendar months."""
    index = start.year * 12 + (start.month - 1) - months
    return start.replace(year=index // 12, month=index % 12 + 1)


class TrendAnalyzer:
    """
    Compares the current calendar month against the window that starts
    `months_back` months earlier and ends where the current month begins.
    """

    def __init__(self, analyzer: Optional[FinanceAnalyzer] = None) -> None:
        self._analyzer = analyzer or FinanceAnalyzer()

    def windows(self, months_back: int, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        if months_back < 1:
            raise ValueError("months_back must be at least 1")
        now = self._analyzer.local_date(now or datetime.now(timezone.utc))
        current_start = month_start(now)
        return shift_months(current_start, months_back), current_start

    def _window_totals(
        self,
        snapshot: Sequence[Transaction],
        tx_type: TransactionType,
        previous_start: datetime,
        current_start: datetime,
    ) -> Tuple[float, float]:
        current = previous = 0.0
        for tx in snapshot:
            if tx.type != tx_type:
                continue
            if tx.date >= current_start:
                current += tx.amount
            elif tx.date >= previous_start:
                previous += tx.amount
        return current, previous

    def trend(
        self,
        snapshot: Sequence[Transaction],
        tx_type: TransactionType,
        months_back: int,
        now: Optional[datetime] = None,
    ) -> TrendData:
        previous_start, current_start = self.windows(months_back, now)
        current, previous = self._window_totals(snapshot, tx_type, previous_start, current_start)
        return compare(current, previous)

    def balance_trend(
        self,
        snapshot: Sequence[Transaction],
        months_back: int,
        now: Optional[datetime] = None,
    ) -> TrendData:
        """Window balance (income minus expenses) against the prior window."""
        previous_start, current_start = self.windows(months_back, now)
        income_now, income_before = self._window_totals(
            snapshot, TransactionType.INCOME, previous_start, current_start
        )
        expense_now, expense_before = self._window_totals(
            snapshot, TransactionType.EXPENSE, previous_start, current_start
        )
        current = income_now - expense_now
        previous = income_before - expense_before

        if previous == 0:
            return TrendData(
                current_total=current,
                previous_total=previous,
                percentage_change=0.0 if current == 0 else 100.0,
                is_increase=current > 0,
            )
        return TrendData(
            current_total=current,
            previous_total=previous,
            percentage_change=round_percentage(abs(current - previous) / abs(previous) * 100),
            is_increase=current > previous,
        )


def compare(current: float, previous: float) -> TrendData:
    if previous == 0:
        if current == 0:
            return TrendData(current_total=current, previous_total=previous, percentage_change=0.0, is_increase=False)
        return TrendData(current_total=current, previous_total=previous, percentage_change=100.0, is_increase=True)

    return TrendData(
        current_total=current,
        previous_total=previous,
        percentage_change=round_percentage(abs(current - previous) / previous * 100),
        is_increase=current > previous,
    )
