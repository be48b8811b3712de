"""Analytics API routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_clock, get_current_user, get_transaction_store
from app.core.clock import Clock
from app.models.user import User
from app.schemas.analytics import (
    AnalyticsReportResponse,
    CategoryBreakdownResponse,
    PeriodTrendResponse,
    PredictionRequest,
    SavingsPredictionResponse,
)
from app.services.analytics_service import AnalyticsService
from app.services.forecast import PredictionScenario
from app.services.transaction_store import TransactionStore

router = APIRouter()


@router.get("/by-category", response_model=CategoryBreakdownResponse)
async def by_category(
    kind: str | None = Query(None, pattern="^(income|expense)$"),
    date_from: date | None = None,
    date_to: date | None = None,
    current_user: User = Depends(get_current_user),
    store: TransactionStore = Depends(get_transaction_store),
    clock: Clock = Depends(get_clock),
):
    """Amounts broken down by category, ordered by total desc.

    Percentages are relative to the total of the selected kind (or of all
    transactions when ``kind`` is omitted).
    """
    service = AnalyticsService(store, clock)
    return await service.category_breakdown(
        current_user, kind=kind, date_from=date_from, date_to=date_to
    )


@router.get("/trends", response_model=PeriodTrendResponse)
async def trends(
    granularity: str = Query("month", pattern="^(day|week|month)$"),
    date_from: date | None = None,
    date_to: date | None = None,
    current_user: User = Depends(get_current_user),
    store: TransactionStore = Depends(get_transaction_store),
    clock: Clock = Depends(get_clock),
):
    """Income, expense and net per period. Weeks are ISO-8601 (``2026-W03``)."""
    service = AnalyticsService(store, clock)
    return await service.period_trends(
        current_user, granularity=granularity, date_from=date_from, date_to=date_to
    )


@router.get("/income-vs-expense", response_model=PeriodTrendResponse)
async def income_vs_expense(
    months: int = Query(6, ge=1, le=60),
    current_user: User = Depends(get_current_user),
    store: TransactionStore = Depends(get_transaction_store),
    clock: Clock = Depends(get_clock),
):
    service = AnalyticsService(store, clock)
    return await service.income_vs_expense(current_user, months=months)


@router.get("/report", response_model=AnalyticsReportResponse)
async def report(
    date_from: date | None = None,
    date_to: date | None = None,
    current_user: User = Depends(get_current_user),
    store: TransactionStore = Depends(get_transaction_store),
    clock: Clock = Depends(get_clock),
):
    """Totals, averages, income/expense breakdowns and the ten largest expenses."""
    service = AnalyticsService(store, clock)
    return await service.report(current_user, date_from=date_from, date_to=date_to)


@router.post(
    "/savings-prediction",
    response_model=SavingsPredictionResponse,
    response_model_exclude_none=True,
)
async def savings_prediction(
    data: PredictionRequest,
    current_user: User = Depends(get_current_user),
    store: TransactionStore = Depends(get_transaction_store),
    clock: Clock = Depends(get_clock),
):
    """Project savings month by month under a what-if scenario.

    Needs at least three months with transactions; otherwise returns
    ``has_data=false`` with a ``reason`` and a ``message``.
    """
    scenario = PredictionScenario(
        expense_reduction_pct=data.expense_reduction,
        income_increase_pct=data.income_increase,
        horizon_months=data.months,
    )
    service = AnalyticsService(store, clock)
    return await service.savings_prediction(current_user, scenario)
