from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    SAVINGS = "savings"


class SortField(str, Enum):
    DATE = "date"
    AMOUNT = "amount"
    CATEGORY = "category"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


CategoryTotals = Dict[str, float]


class TransactionCreate(BaseModel):
    type: TransactionType
    amount: float = Field(..., gt=0)
    description: str = Field(..., min_length=1)
    category: str
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("date")
    @classmethod
    def _as_aware(cls, value: datetime) -> datetime:
        # naive timestamps are stored as UTC instants
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Transaction(TransactionCreate):
    """Stored transaction. Immutable; an edit produces a new record with a new id."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))


class StoreResult(BaseModel):
    """Outcome of a store mutation. `warning` is set when persistence failed."""

    transaction: Optional[Transaction] = None
    removed: bool = False
    warning: Optional[str] = None
