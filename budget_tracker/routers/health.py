"""
Health Check Router
Reports API status and whether the storage backend is readable
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from budget_tracker.core.config import settings
from budget_tracker.core.dependencies import get_finance_service
from budget_tracker.core.errors import PersistenceError
from budget_tracker.services.finance import FinanceService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check(finance: FinanceService = Depends(get_finance_service)):
    storage = {"connected": False, "error": None, **finance.repository.describe()}
    try:
        finance.repository.load()
        storage["connected"] = True
    except PersistenceError as e:
        storage["error"] = str(e)
        logger.error(f"Storage check failed: {str(e)}")

    return {
        "status": "healthy" if storage["connected"] else "degraded",
        "service": settings.PROJECT_NAME,
        "transactions": len(finance.snapshot()),
        "storage": storage,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
