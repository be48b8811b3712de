"""Dashboard service: monthly summary, recent activity and expense trends."""

import structlog

from app.config import settings
from app.core.cache import TTLCache, make_key
from app.core.clock import Clock, utc_now
from app.models.transaction import EXPENSE, INCOME
from app.models.user import User
from app.services.aggregation import MONTH, aggregate_by_category, aggregate_by_period
from app.services.analytics_service import breakdown_payload, transaction_payload
from app.services.transaction_store import TransactionStore
from app.utils.dates import add_months, month_bounds, month_start, start_of_day
from app.utils.numbers import round_half_up

logger = structlog.get_logger()

SUMMARY_CACHE = "dashboard.summary"
TRENDS_CACHE = "dashboard.trends"


def percentage_change(current: float, previous: float) -> float:
    """Relative change in percent, one decimal; 0 when there is no baseline."""
    if previous <= 0:
        return 0.0
    return round_half_up((current - previous) / previous * 100, 1)


class DashboardService:
    def __init__(self, store: TransactionStore, cache: TTLCache, clock: Clock = utc_now):
        self.store = store
        self.cache = cache
        self.clock = clock

    async def summary(self, user: User) -> dict:
        """Current vs previous month totals, all-time balance and latest activity.

        Served from the cache for ``dashboard_cache_ttl_seconds``; the entry is
        dropped whenever one of the user's transactions changes.
        """
        key = make_key(SUMMARY_CACHE, user.id)
        cached = self.cache.get(key)
        if cached is not None:
            return {**cached, "cached": True}

        today = self.clock().date()
        current_start, current_end = month_bounds(today)
        previous_start, previous_end = month_bounds(add_months(today, -1))

        current = await self.store.totals_by_kind(user.id, date_from=current_start, date_to=current_end)
        previous = await self.store.totals_by_kind(user.id, date_from=previous_start, date_to=previous_end)
        all_time = await self.store.totals_by_kind(user.id)
        recent = await self.store.fetch(
            user.id, newest_first=True, limit=settings.dashboard_recent_limit
        )

        current_income, current_expenses = current[INCOME], current[EXPENSE]
        previous_income, previous_expenses = previous[INCOME], previous[EXPENSE]

        current_balance = current_income - current_expenses
        previous_balance = previous_income - previous_expenses
        balance_change = (
            round_half_up((current_balance - previous_balance) / abs(previous_balance) * 100, 1)
            if previous_balance != 0
            else 0.0
        )

        summary = {
            "total_balance": round_half_up(all_time[INCOME] - all_time[EXPENSE], 2),
            "income": round_half_up(current_income, 2),
            "expenses": round_half_up(current_expenses, 2),
            "previous_income": round_half_up(previous_income, 2),
            "previous_expenses": round_half_up(previous_expenses, 2),
            "percentage_changes": {
                "balance": balance_change,
                "income": percentage_change(current_income, previous_income),
                "expenses": percentage_change(current_expenses, previous_expenses),
            },
            "recent_transactions": [transaction_payload(t) for t in recent],
        }
        self.cache.set(key, summary, ttl=settings.dashboard_cache_ttl_seconds)
        return {**summary, "cached": False}

    async def recent_transactions(self, user: User, limit: int = 5) -> dict:
        transactions = await self.store.fetch(user.id, newest_first=True, limit=limit)
        return {"data": [transaction_payload(t) for t in transactions]}

    async def expense_trends(self, user: User, months: int = 6) -> dict:
        """Monthly expense total, count and average for the last ``months`` months."""
        key = make_key(TRENDS_CACHE, user.id, months=months)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        today = self.clock().date()
        start = add_months(month_start(today), -(months - 1))
        transactions = await self.store.fetch(user.id, kind=EXPENSE, date_from=start_of_day(start))

        data = [
            {
                "month": bucket.period_key,
                "month_label": bucket.period_label,
                "total": round_half_up(bucket.expense, 2),
                "count": bucket.count,
                "average": round_half_up(bucket.expense / bucket.count, 2) if bucket.count else 0.0,
            }
            for bucket in aggregate_by_period(transactions, MONTH)
        ]
        result = {"data": data}
        self.cache.set(key, result, ttl=settings.dashboard_cache_ttl_seconds)
        return result

    async def expense_categories(self, user: User) -> dict:
        """Current month's largest expense categories."""
        start, end = month_bounds(self.clock().date())
        transactions = await self.store.fetch(user.id, kind=EXPENSE, date_from=start, date_to=end)
        breakdown = aggregate_by_category(transactions)
        return {
            "data": breakdown_payload(breakdown)[: settings.dashboard_category_limit],
            "total": round_half_up(breakdown.total, 2),
        }
