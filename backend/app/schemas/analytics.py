"""Analytics schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class CategoryBreakdownItem(BaseModel):
    category: str
    amount: float
    count: int
    percentage: float


class CategoryBreakdownResponse(BaseModel):
    data: list[CategoryBreakdownItem]
    total: float


class PeriodTrendItem(BaseModel):
    period: str  # "2026-01", "2026-W03", "2026-01-15"
    period_label: str
    income: float
    expense: float
    net: float
    count: int


class PeriodTrendResponse(BaseModel):
    data: list[PeriodTrendItem]
    granularity: str


class TransactionCounts(BaseModel):
    income: int
    expense: int
    total: int


class ReportSummary(BaseModel):
    total_income: float
    total_expense: float
    net_amount: float
    transaction_counts: TransactionCounts
    avg_income: float
    avg_expense: float


class TopExpense(BaseModel):
    id: int
    description: str
    category: str
    amount: float
    date: datetime


class DateRange(BaseModel):
    date_from: date | None = None
    date_to: date | None = None


class AnalyticsReportResponse(BaseModel):
    has_data: bool
    summary: ReportSummary
    expense_breakdown: list[CategoryBreakdownItem]
    income_breakdown: list[CategoryBreakdownItem]
    top_expenses: list[TopExpense]
    date_range: DateRange


# ── Savings prediction ────────────────────────────


class PredictionRequest(BaseModel):
    expense_reduction: float = Field(0, ge=0, le=100, description="Percent cut applied to average expense")
    income_increase: float = Field(0, ge=0, le=100, description="Percent raise applied to average income")
    months: int = Field(12, gt=0, le=120, description="Number of months to project")


class HistoricalMonth(BaseModel):
    month: str
    month_label: str
    income: float
    expense: float
    savings: float


class HistoricalSummary(BaseModel):
    months_analyzed: int
    avg_monthly_income: float
    avg_monthly_expense: float
    avg_monthly_savings: float
    income_trend: float
    expense_trend: float
    historical_months: list[HistoricalMonth]


class ScenarioSummary(BaseModel):
    expense_reduction: float
    income_increase: float
    adjusted_avg_income: float
    adjusted_avg_expense: float


class MonthlyPredictionItem(BaseModel):
    month: int
    month_label: str
    projected_income: float
    projected_expense: float
    monthly_savings: float
    cumulative_savings: float


class MonthSavings(BaseModel):
    month: str
    savings: float


class PredictionSummary(BaseModel):
    total_projected_savings: float
    avg_monthly_savings: float
    best_month: MonthSavings
    worst_month: MonthSavings
    months_predicted: int


class SavingsPredictionResponse(BaseModel):
    has_data: bool
    reason: str | None = None  # no_data, insufficient_data
    message: str | None = None
    historical: HistoricalSummary | None = None
    scenario: ScenarioSummary | None = None
    predictions: list[MonthlyPredictionItem] | None = None
    summary: PredictionSummary | None = None
