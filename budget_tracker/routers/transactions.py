from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from budget_tracker.core.dependencies import get_finance_service
from budget_tracker.models.transaction import (
    SortField,
    SortOrder,
    StoreResult,
    Transaction,
    TransactionCreate,
    TransactionType,
)
from budget_tracker.services.finance import FinanceService

router = APIRouter()


@router.post("/", response_model=StoreResult, status_code=status.HTTP_201_CREATED)
def create_transaction(transaction: TransactionCreate, finance: FinanceService = Depends(get_finance_service)):
    return finance.add_transaction(transaction)


@router.get("/", response_model=List[Transaction])
def list_transactions(
    type: Optional[TransactionType] = None,
    sort_by: Optional[SortField] = None,
    order: SortOrder = SortOrder.DESC,
    finance: FinanceService = Depends(get_finance_service),
):
    """
    List transactions, optionally filtered by type. Without `sort_by` the
    insertion order is kept.
    """
    return finance.list_transactions(type, sort_by, order)


@router.put("/{transaction_id}", response_model=StoreResult)
def replace_transaction(
    transaction_id: str,
    transaction: TransactionCreate,
    finance: FinanceService = Depends(get_finance_service),
):
    result = finance.replace_transaction(transaction_id, transaction)
    if result is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return result


@router.delete("/{transaction_id}", response_model=StoreResult)
def delete_transaction(transaction_id: str, finance: FinanceService = Depends(get_finance_service)):
    # deleting an unknown id is a no-op reported as removed=false
    return finance.delete_transaction(transaction_id)
