"""Category and period aggregation over an in-memory transaction sequence.

Both aggregations group into a dict keyed by category or period key and then
sort explicitly. They are pure: the input is never mutated and an empty input
yields an empty result.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from app.models.transaction import INCOME
from app.services.transaction_store import TransactionRecord
from app.utils.dates import day_label, month_label
from app.utils.numbers import round_half_up

DAY = "day"
WEEK = "week"
MONTH = "month"
GRANULARITIES = (DAY, WEEK, MONTH)


@dataclass
class CategoryBucket:
    category: str
    total_amount: float = 0.0
    count: int = 0
    percentage: float = 0.0


@dataclass
class CategoryBreakdown:
    buckets: list[CategoryBucket] = field(default_factory=list)
    total: float = 0.0


@dataclass
class PeriodBucket:
    period_key: str
    period_label: str
    income: float = 0.0
    expense: float = 0.0
    count: int = 0

    @property
    def net(self) -> float:
        return self.income - self.expense


def period_key(day: date, granularity: str) -> str:
    """Sortable key: ``YYYY-MM-DD``, ISO ``YYYY-Www`` or ``YYYY-MM``.

    Weeks follow ISO-8601: they start on Monday and week 1 is the week holding
    January 4th, so early-January days can belong to the previous ISO year.
    """
    if granularity == DAY:
        return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"
    if granularity == WEEK:
        iso_year, iso_week, _ = day.isocalendar()
        return f"{iso_year:04d}-W{iso_week:02d}"
    if granularity == MONTH:
        return f"{day.year:04d}-{day.month:02d}"
    raise ValueError(f"Unknown granularity: {granularity!r}")


def period_label(day: date, granularity: str) -> str:
    if granularity == DAY:
        return day_label(day)
    if granularity == WEEK:
        iso_year, iso_week, _ = day.isocalendar()
        return f"Week {iso_week}, {iso_year}"
    if granularity == MONTH:
        return month_label(day)
    raise ValueError(f"Unknown granularity: {granularity!r}")


def aggregate_by_category(
    transactions: Iterable[TransactionRecord],
    kind: str | None = None,
) -> CategoryBreakdown:
    """Sum amounts per category, largest first.

    Ties keep the order in which categories were first seen. Percentages are
    relative to the total of the filtered set and rounded to one decimal.
    """
    groups: dict[str, CategoryBucket] = {}
    for txn in transactions:
        if kind is not None and txn.kind != kind:
            continue
        bucket = groups.get(txn.category)
        if bucket is None:
            bucket = groups[txn.category] = CategoryBucket(category=txn.category)
        bucket.total_amount += txn.amount
        bucket.count += 1

    buckets = sorted(groups.values(), key=lambda b: b.total_amount, reverse=True)
    grand_total = sum(b.total_amount for b in buckets)
    for bucket in buckets:
        bucket.percentage = (
            round_half_up(bucket.total_amount / grand_total * 100, 1) if grand_total else 0.0
        )
    return CategoryBreakdown(buckets=buckets, total=grand_total)


def aggregate_by_period(
    transactions: Iterable[TransactionRecord],
    granularity: str = MONTH,
) -> list[PeriodBucket]:
    """One bucket per period that has at least one transaction, in key order."""
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown granularity: {granularity!r}")

    buckets: dict[str, PeriodBucket] = {}
    for txn in transactions:
        day = txn.occurred_at.date()
        key = period_key(day, granularity)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = PeriodBucket(
                period_key=key, period_label=period_label(day, granularity)
            )
        if txn.kind == INCOME:
            bucket.income += txn.amount
        else:
            bucket.expense += txn.amount
        bucket.count += 1

    return [buckets[key] for key in sorted(buckets)]
