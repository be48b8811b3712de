"""Dashboard API routes."""

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_cache, get_clock, get_current_user, get_transaction_store
from app.core.cache import TTLCache
from app.core.clock import Clock
from app.models.user import User
from app.schemas.analytics import CategoryBreakdownResponse
from app.schemas.dashboard import DashboardSummary, ExpenseTrendResponse, RecentTransactionsResponse
from app.services.dashboard_service import DashboardService
from app.services.transaction_store import TransactionStore

router = APIRouter()


def get_dashboard_service(
    store: TransactionStore = Depends(get_transaction_store),
    cache: TTLCache = Depends(get_cache),
    clock: Clock = Depends(get_clock),
) -> DashboardService:
    return DashboardService(store, cache, clock)


@router.get("/summary", response_model=DashboardSummary)
async def summary(
    current_user: User = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Current month vs previous month, all-time balance, latest transactions."""
    return await service.summary(current_user)


@router.get("/recent-transactions", response_model=RecentTransactionsResponse)
async def recent_transactions(
    limit: int = Query(5, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    return await service.recent_transactions(current_user, limit=limit)


@router.get("/expense-trends", response_model=ExpenseTrendResponse)
async def expense_trends(
    months: int = Query(6, ge=1, le=60),
    current_user: User = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    return await service.expense_trends(current_user, months=months)


@router.get("/expense-categories", response_model=CategoryBreakdownResponse)
async def expense_categories(
    current_user: User = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Largest expense categories of the current month."""
    return await service.expense_categories(current_user)
