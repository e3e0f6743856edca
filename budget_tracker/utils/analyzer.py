from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import datetime, timezone, tzinfo
from typing import Dict, List, Optional, Sequence, Tuple

from budget_tracker.models.report import MonthlyBucket
from budget_tracker.models.transaction import CategoryTotals, Transaction, TransactionType


class FinanceAnalyzer:
    """
    Read-side derivations over a transaction snapshot. Nothing is cached:
    every call recomputes from the snapshot it is given.
    """

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self._tz = tz or timezone.utc

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def local_date(self, moment: datetime) -> datetime:
        return moment.astimezone(self._tz)

    @staticmethod
    def filter_by_type(
        snapshot: Sequence[Transaction],
        tx_type: Optional[TransactionType] = None,
    ) -> List[Transaction]:
        if tx_type is None:
            return list(snapshot)
        return [tx for tx in snapshot if tx.type == tx_type]

    def total(self, snapshot: Sequence[Transaction], tx_type: TransactionType) -> float:
        return sum((tx.amount for tx in snapshot if tx.type == tx_type), 0.0)

    def balance(self, snapshot: Sequence[Transaction]) -> float:
        """Income minus expenses; savings are not deducted."""
        return self.total(snapshot, TransactionType.INCOME) - self.total(snapshot, TransactionType.EXPENSE)

    def category_totals(self, snapshot: Sequence[Transaction], tx_type: TransactionType) -> CategoryTotals:
        totals: Dict[str, float] = defaultdict(float)
        for tx in snapshot:
            if tx.type == tx_type:
                totals[tx.category] += tx.amount
        return dict(totals)

    def monthly_data(self, snapshot: Sequence[Transaction]) -> List[MonthlyBucket]:
        """
        Group transactions by calendar (year, month) and sum each type per bucket.

        Buckets are ordered newest first on the numeric (year, month) key;
        month labels alone repeat across years and do not sort chronologically.
        """
        buckets: Dict[Tuple[int, int], MonthlyBucket] = {}
        for tx in snapshot:
            moment = self.local_date(tx.date)
            key = (moment.year, moment.month)
            bucket = buckets.get(key)
            if bucket is None:
                bucket = MonthlyBucket(
                    label=calendar.month_abbr[moment.month],
                    year=moment.year,
                    month=moment.month,
                )
                buckets[key] = bucket
            field = f"{tx.type.value}_sum"
            setattr(bucket, field, getattr(bucket, field) + tx.amount)

        return [buckets[key] for key in sorted(buckets, reverse=True)]
