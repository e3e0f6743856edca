from typing import Dict

from pydantic import BaseModel


class MonthlyBucket(BaseModel):
    label: str
    year: int
    month: int
    income_sum: float = 0.0
    expense_sum: float = 0.0
    savings_sum: float = 0.0


class TrendData(BaseModel):
    current_total: float
    previous_total: float
    percentage_change: float
    is_increase: bool


class DashboardSummary(BaseModel):
    totals: Dict[str, float]
    balance: float
    trends: Dict[str, TrendData]
    balance_trend: TrendData
