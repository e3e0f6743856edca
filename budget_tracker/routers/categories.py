from fastapi import APIRouter, Depends, HTTPException, status

from budget_tracker.core.dependencies import get_finance_service
from budget_tracker.models.category import CategoryCreate, CategoryList
from budget_tracker.models.transaction import TransactionType
from budget_tracker.services.finance import FinanceService

router = APIRouter()


@router.get("/{tx_type}", response_model=CategoryList)
def list_categories(tx_type: TransactionType, finance: FinanceService = Depends(get_finance_service)):
    return CategoryList(type=tx_type, categories=list(finance.categories.categories(tx_type)))


@router.post("/{tx_type}", response_model=CategoryList, status_code=status.HTTP_201_CREATED)
def add_category(
    tx_type: TransactionType,
    category: CategoryCreate,
    finance: FinanceService = Depends(get_finance_service),
):
    try:
        added = finance.categories.add(tx_type, category.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not added:
        raise HTTPException(status_code=409, detail="This category already exists")
    return CategoryList(type=tx_type, categories=list(finance.categories.categories(tx_type)))
