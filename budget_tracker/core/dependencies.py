from fastapi import Request

from budget_tracker.services.finance import FinanceService


def get_finance_service(request: Request) -> FinanceService:
    """The service instance built in the app lifespan."""
    return request.app.state.finance
