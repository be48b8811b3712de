"""Builders and fakes shared by the test modules."""

from datetime import datetime, timezone

from app.core.exceptions import UpstreamFetchError
from app.services.transaction_store import TransactionRecord

FIXED_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def at(year: int, month: int, day: int, hour: int = 12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def make_txn(
    txn_id: int,
    kind: str,
    amount: float,
    category: str = "General",
    when: datetime = FIXED_NOW,
    user_id: int = 1,
    description: str | None = None,
) -> TransactionRecord:
    return TransactionRecord(
        id=txn_id,
        user_id=user_id,
        amount=amount,
        kind=kind,
        category=category,
        description=description or f"{category} #{txn_id}",
        occurred_at=when,
    )


class InMemoryTransactionStore:
    """Stand-in for TransactionStore with the same filtering and ordering."""

    def __init__(self, records=()):
        self.records = list(records)
        self.calls = 0
        self.fetch_limits = []

    def add(self, *records):
        self.records.extend(records)

    async def fetch(
        self,
        user_id,
        *,
        kind=None,
        category=None,
        date_from=None,
        date_to=None,
        newest_first=False,
        limit=None,
    ):
        self.calls += 1
        self.fetch_limits.append(limit)
        rows = [
            r
            for r in self.records
            if r.user_id == user_id
            and (kind is None or r.kind == kind)
            and (category is None or r.category == category)
            and (date_from is None or r.occurred_at >= date_from)
            and (date_to is None or r.occurred_at <= date_to)
        ]
        rows.sort(key=lambda r: (r.occurred_at, r.id), reverse=newest_first)
        return rows[:limit] if limit is not None else rows

    async def totals_by_kind(self, user_id, *, date_from=None, date_to=None):
        self.calls += 1
        totals = {"income": 0.0, "expense": 0.0}
        for r in self.records:
            if (
                r.user_id == user_id
                and (date_from is None or r.occurred_at >= date_from)
                and (date_to is None or r.occurred_at <= date_to)
            ):
                totals[r.kind] += r.amount
        return totals


class FailingTransactionStore:
    async def fetch(self, user_id, **filters):
        raise UpstreamFetchError()

    async def totals_by_kind(self, user_id, **filters):
        raise UpstreamFetchError()
