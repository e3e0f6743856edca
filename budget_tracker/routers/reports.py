import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from budget_tracker.core.config import settings
from budget_tracker.core.dependencies import get_finance_service
from budget_tracker.models.report import DashboardSummary, MonthlyBucket, TrendData
from budget_tracker.models.transaction import TransactionType
from budget_tracker.services.finance import FinanceService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/totals")
def get_totals(finance: FinanceService = Depends(get_finance_service)) -> Dict[str, float]:
    return {tx_type.value: finance.get_total(tx_type) for tx_type in TransactionType}


@router.get("/totals/{tx_type}")
def get_total(tx_type: TransactionType, finance: FinanceService = Depends(get_finance_service)) -> Dict:
    return {"type": tx_type.value, "total": finance.get_total(tx_type)}


@router.get("/categories/{tx_type}")
def get_category_totals(
    tx_type: TransactionType,
    finance: FinanceService = Depends(get_finance_service),
) -> Dict[str, float]:
    return finance.get_category_totals(tx_type)


@router.get("/monthly", response_model=List[MonthlyBucket])
def get_monthly_data(
    limit: Optional[int] = Query(default=None, ge=1),
    finance: FinanceService = Depends(get_finance_service),
):
    """
    Monthly income/expense/savings sums, newest month first.
    """
    return finance.get_monthly_data(limit)


@router.get("/trends/{tx_type}", response_model=TrendData)
def get_trend(
    tx_type: TransactionType,
    months_back: int = settings.DEFAULT_TREND_MONTHS,
    finance: FinanceService = Depends(get_finance_service),
):
    try:
        return finance.get_trend_data(tx_type, months_back)
    except ValueError as e:
        logger.info(f"Rejected trend request: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/dashboard", response_model=DashboardSummary)
def get_dashboard(finance: FinanceService = Depends(get_finance_service)):
    return finance.dashboard()
