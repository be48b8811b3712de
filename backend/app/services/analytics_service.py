"""Analytics service: category breakdowns, period trends, reports and savings prediction."""

from datetime import date

import structlog

from app.config import settings
from app.core.clock import Clock, utc_now
from app.core.exceptions import ValidationError
from app.models.user import User
from app.services.aggregation import (
    GRANULARITIES,
    MONTH,
    CategoryBreakdown,
    PeriodBucket,
    aggregate_by_category,
    aggregate_by_period,
)
from app.services.forecast import PredictionScenario, SavingsPrediction, predict_savings
from app.services.reports import build_report
from app.services.transaction_store import TransactionRecord, TransactionStore
from app.utils.dates import add_months, end_of_day, month_start, start_of_day
from app.utils.numbers import round_half_up

logger = structlog.get_logger()


def breakdown_payload(breakdown: CategoryBreakdown) -> list[dict]:
    return [
        {
            "category": bucket.category,
            "amount": round_half_up(bucket.total_amount, 2),
            "count": bucket.count,
            "percentage": bucket.percentage,
        }
        for bucket in breakdown.buckets
    ]


def period_payload(bucket: PeriodBucket) -> dict:
    return {
        "period": bucket.period_key,
        "period_label": bucket.period_label,
        "income": round_half_up(bucket.income, 2),
        "expense": round_half_up(bucket.expense, 2),
        "net": round_half_up(bucket.net, 2),
        "count": bucket.count,
    }


def transaction_payload(txn: TransactionRecord) -> dict:
    return {
        "id": txn.id,
        "description": txn.description,
        "category": txn.category,
        "amount": txn.amount,
        "type": txn.kind,
        "date": txn.occurred_at,
    }


def prediction_payload(result: SavingsPrediction) -> dict:
    if not result.has_data:
        return {"has_data": False, "reason": result.reason, "message": result.message}

    historical = result.historical
    summary = result.summary
    return {
        "has_data": True,
        "historical": {
            "months_analyzed": historical.months_analyzed,
            "avg_monthly_income": historical.avg_monthly_income,
            "avg_monthly_expense": historical.avg_monthly_expense,
            "avg_monthly_savings": historical.avg_monthly_savings,
            "income_trend": historical.income_trend,
            "expense_trend": historical.expense_trend,
            "historical_months": [
                {
                    "month": m.period_key,
                    "month_label": m.period_label,
                    "income": round_half_up(m.income, 2),
                    "expense": round_half_up(m.expense, 2),
                    "savings": round_half_up(m.net, 2),
                }
                for m in historical.months
            ],
        },
        "scenario": vars(result.scenario),
        "predictions": [
            {
                "month": p.month_index,
                "month_label": p.month_label,
                "projected_income": p.projected_income,
                "projected_expense": p.projected_expense,
                "monthly_savings": p.monthly_savings,
                "cumulative_savings": p.cumulative_savings,
            }
            for p in result.predictions
        ],
        "summary": {
            "total_projected_savings": summary.total_projected_savings,
            "avg_monthly_savings": summary.avg_monthly_savings,
            "best_month": {
                "month": summary.best_month.month_label,
                "savings": summary.best_month.monthly_savings,
            },
            "worst_month": {
                "month": summary.worst_month.month_label,
                "savings": summary.worst_month.monthly_savings,
            },
            "months_predicted": summary.months_predicted,
        },
    }


class AnalyticsService:
    def __init__(self, store: TransactionStore, clock: Clock = utc_now):
        self.store = store
        self.clock = clock

    async def _fetch(
        self,
        user: User,
        kind: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        newest_first: bool = False,
    ) -> list[TransactionRecord]:
        if date_from and date_to and date_from > date_to:
            raise ValidationError("date_from must be on or before date_to")
        return await self.store.fetch(
            user.id,
            kind=kind,
            date_from=start_of_day(date_from) if date_from else None,
            date_to=end_of_day(date_to) if date_to else None,
            newest_first=newest_first,
        )

    async def category_breakdown(
        self,
        user: User,
        kind: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> dict:
        """Totals per category, largest first, with percentages of the grand total."""
        transactions = await self._fetch(user, kind, date_from, date_to)
        breakdown = aggregate_by_category(transactions, kind)
        return {"data": breakdown_payload(breakdown), "total": round_half_up(breakdown.total, 2)}

    async def period_trends(
        self,
        user: User,
        granularity: str = MONTH,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> dict:
        """Income, expense and net per day, ISO week or month."""
        if granularity not in GRANULARITIES:
            raise ValidationError(f"granularity must be one of {', '.join(GRANULARITIES)}")
        transactions = await self._fetch(user, date_from=date_from, date_to=date_to)
        buckets = aggregate_by_period(transactions, granularity)
        return {"data": [period_payload(b) for b in buckets], "granularity": granularity}

    async def income_vs_expense(self, user: User, months: int = 6) -> dict:
        """Monthly income vs expense for the last ``months`` calendar months."""
        today = self.clock().date()
        date_from = add_months(month_start(today), -(months - 1))
        return await self.period_trends(user, MONTH, date_from=date_from, date_to=today)

    async def report(
        self,
        user: User,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> dict:
        transactions = await self._fetch(user, date_from=date_from, date_to=date_to, newest_first=True)
        report = build_report(
            transactions,
            top_n=settings.top_expenses_limit,
            date_from=date_from,
            date_to=date_to,
        )
        return {
            "has_data": report.has_data,
            "summary": vars(report.summary),
            "expense_breakdown": breakdown_payload(report.expense_breakdown),
            "income_breakdown": breakdown_payload(report.income_breakdown),
            "top_expenses": [transaction_payload(t) for t in report.top_expenses],
            "date_range": {"date_from": report.date_from, "date_to": report.date_to},
        }

    async def savings_prediction(self, user: User, scenario: PredictionScenario) -> dict:
        """Project savings from the last ``prediction_history_months`` of activity."""
        today = self.clock().date()
        history_start = add_months(month_start(today), -(settings.prediction_history_months - 1))
        transactions = await self._fetch(user, date_from=history_start, date_to=today)
        history = aggregate_by_period(transactions, MONTH)

        result = predict_savings(history, scenario, today)
        logger.info(
            "Savings prediction",
            user_id=user.id,
            months_analyzed=len(history),
            has_data=result.has_data,
            horizon=scenario.horizon_months,
        )
        return prediction_payload(result)
