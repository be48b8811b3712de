"""Dashboard schemas."""

from datetime import datetime

from pydantic import BaseModel


class RecentTransaction(BaseModel):
    id: int
    description: str
    amount: float
    type: str
    category: str
    date: datetime


class PercentageChanges(BaseModel):
    balance: float
    income: float
    expenses: float


class DashboardSummary(BaseModel):
    total_balance: float
    income: float
    expenses: float
    previous_income: float
    previous_expenses: float
    percentage_changes: PercentageChanges
    recent_transactions: list[RecentTransaction]
    cached: bool = False


class RecentTransactionsResponse(BaseModel):
    data: list[RecentTransaction]


class ExpenseTrendItem(BaseModel):
    month: str
    month_label: str
    total: float
    count: int
    average: float


class ExpenseTrendResponse(BaseModel):
    data: list[ExpenseTrendItem]
