"""Consolidated analytics report."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from app.models.transaction import EXPENSE, INCOME
from app.services.aggregation import CategoryBreakdown, aggregate_by_category
from app.services.transaction_store import TransactionRecord
from app.utils.numbers import round_half_up


@dataclass
class ReportSummary:
    total_income: float
    total_expense: float
    net_amount: float
    transaction_counts: dict[str, int]
    avg_income: float
    avg_expense: float


@dataclass
class AnalyticsReport:
    has_data: bool
    summary: ReportSummary
    expense_breakdown: CategoryBreakdown
    income_breakdown: CategoryBreakdown
    top_expenses: list[TransactionRecord] = field(default_factory=list)
    date_from: date | None = None
    date_to: date | None = None


def _average(total: float, count: int) -> float:
    return round_half_up(total / count, 2) if count else 0.0


def build_report(
    transactions: Sequence[TransactionRecord],
    top_n: int = 10,
    date_from: date | None = None,
    date_to: date | None = None,
) -> AnalyticsReport:
    """Totals, per-kind averages, category breakdowns and the largest expenses.

    Top expenses are sorted by amount, largest first; equal amounts keep their
    input order.
    """
    incomes = [t for t in transactions if t.kind == INCOME]
    expenses = [t for t in transactions if t.kind == EXPENSE]
    total_income = math.fsum(t.amount for t in incomes)
    total_expense = math.fsum(t.amount for t in expenses)

    return AnalyticsReport(
        has_data=bool(transactions),
        summary=ReportSummary(
            total_income=round_half_up(total_income, 2),
            total_expense=round_half_up(total_expense, 2),
            net_amount=round_half_up(total_income - total_expense, 2),
            transaction_counts={
                INCOME: len(incomes),
                EXPENSE: len(expenses),
                "total": len(transactions),
            },
            avg_income=_average(total_income, len(incomes)),
            avg_expense=_average(total_expense, len(expenses)),
        ),
        expense_breakdown=aggregate_by_category(expenses),
        income_breakdown=aggregate_by_category(incomes),
        top_expenses=sorted(expenses, key=lambda t: t.amount, reverse=True)[:top_n],
        date_from=date_from,
        date_to=date_to,
    )
