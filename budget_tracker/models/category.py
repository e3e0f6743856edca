from typing import List

from pydantic import BaseModel, Field

from budget_tracker.models.transaction import TransactionType


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)


class CategoryList(BaseModel):
    type: TransactionType
    categories: List[str]
