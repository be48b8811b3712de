"""Savings forecast from monthly history plus a what-if scenario."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from app.core.exceptions import InvalidScenarioError
from app.services.aggregation import PeriodBucket
from app.services.trend import slope
from app.utils.dates import add_months, month_label
from app.utils.numbers import round_half_up

MIN_HISTORY_MONTHS = 3

NO_DATA = "no_data"
INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class PredictionScenario:
    expense_reduction_pct: float = 0.0
    income_increase_pct: float = 0.0
    horizon_months: int = 12

    def __post_init__(self):
        for name, value in (
            ("expense_reduction", self.expense_reduction_pct),
            ("income_increase", self.income_increase_pct),
        ):
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 100:
                raise InvalidScenarioError(name, f"{name} must be between 0 and 100")
        months = self.horizon_months
        if isinstance(months, bool) or not isinstance(months, int) or months <= 0:
            raise InvalidScenarioError("months", "months must be a positive integer")


@dataclass
class MonthlyPrediction:
    month_index: int
    month_label: str
    projected_income: float
    projected_expense: float
    monthly_savings: float
    cumulative_savings: float


@dataclass
class HistoricalSummary:
    months_analyzed: int
    avg_monthly_income: float
    avg_monthly_expense: float
    avg_monthly_savings: float
    income_trend: float
    expense_trend: float
    months: list[PeriodBucket] = field(default_factory=list)


@dataclass
class ScenarioSummary:
    expense_reduction: float
    income_increase: float
    adjusted_avg_income: float
    adjusted_avg_expense: float


@dataclass
class PredictionSummary:
    total_projected_savings: float
    avg_monthly_savings: float
    best_month: MonthlyPrediction
    worst_month: MonthlyPrediction
    months_predicted: int


@dataclass
class SavingsPrediction:
    has_data: bool
    reason: str | None = None
    message: str | None = None
    historical: HistoricalSummary | None = None
    scenario: ScenarioSummary | None = None
    predictions: list[MonthlyPrediction] | None = None
    summary: PredictionSummary | None = None


def _mean(values: Sequence[float]) -> float:
    return math.fsum(values) / len(values)


def predict_savings(
    history: Sequence[PeriodBucket],
    scenario: PredictionScenario,
    today: date,
) -> SavingsPrediction:
    """Project income, expense and savings ``scenario.horizon_months`` ahead.

    ``history`` holds one monthly bucket per month that had transactions, in
    ascending order. With fewer than three months the result carries
    ``has_data=False`` and an explanation instead of a projection.

    Month ``i`` of the projection is ``avg * adjustment + trend * i``; expense
    is floored at zero. Outputs are rounded to cents, the running total is not.
    """
    if not history:
        return SavingsPrediction(
            has_data=False,
            reason=NO_DATA,
            message="No transaction data available for prediction. Add some transactions first.",
        )
    if len(history) < MIN_HISTORY_MONTHS:
        return SavingsPrediction(
            has_data=False,
            reason=INSUFFICIENT_DATA,
            message=(
                f"Need at least {MIN_HISTORY_MONTHS} months of data for accurate "
                f"predictions (found {len(history)})."
            ),
        )

    incomes = [m.income for m in history]
    expenses = [m.expense for m in history]
    avg_income = _mean(incomes)
    avg_expense = _mean(expenses)
    income_trend = slope(incomes)
    expense_trend = slope(expenses)

    adjusted_income = avg_income * (1 + scenario.income_increase_pct / 100)
    adjusted_expense = avg_expense * (1 - scenario.expense_reduction_pct / 100)

    first_month = add_months(today, 1)
    predictions: list[MonthlyPrediction] = []
    cumulative = 0.0
    for i in range(1, scenario.horizon_months + 1):
        projected_income = adjusted_income + income_trend * i
        projected_expense = max(0.0, adjusted_expense + expense_trend * i)
        savings = projected_income - projected_expense
        cumulative += savings
        predictions.append(MonthlyPrediction(
            month_index=i,
            month_label=month_label(add_months(first_month, i - 1)),
            projected_income=round_half_up(projected_income, 2),
            projected_expense=round_half_up(projected_expense, 2),
            monthly_savings=round_half_up(savings, 2),
            cumulative_savings=round_half_up(cumulative, 2),
        ))

    # Strict comparisons keep the first month on ties
    best = worst = predictions[0]
    for prediction in predictions[1:]:
        if prediction.monthly_savings > best.monthly_savings:
            best = prediction
        if prediction.monthly_savings < worst.monthly_savings:
            worst = prediction

    return SavingsPrediction(
        has_data=True,
        historical=HistoricalSummary(
            months_analyzed=len(history),
            avg_monthly_income=round_half_up(avg_income, 2),
            avg_monthly_expense=round_half_up(avg_expense, 2),
            avg_monthly_savings=round_half_up(_mean([m.net for m in history]), 2),
            income_trend=round_half_up(income_trend, 2),
            expense_trend=round_half_up(expense_trend, 2),
            months=list(history),
        ),
        scenario=ScenarioSummary(
            expense_reduction=scenario.expense_reduction_pct,
            income_increase=scenario.income_increase_pct,
            adjusted_avg_income=round_half_up(adjusted_income, 2),
            adjusted_avg_expense=round_half_up(adjusted_expense, 2),
        ),
        predictions=predictions,
        summary=PredictionSummary(
            total_projected_savings=round_half_up(cumulative, 2),
            avg_monthly_savings=round_half_up(cumulative / scenario.horizon_months, 2),
            best_month=best,
            worst_month=worst,
            months_predicted=scenario.horizon_months,
        ),
    )
