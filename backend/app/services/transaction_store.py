"""Read-only access to persisted transactions for the analytics engine."""

from dataclasses import dataclass
from datetime import datetime, timezone

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import UpstreamFetchError
from app.models.transaction import TRANSACTION_TYPES, Transaction

logger = structlog.get_logger()


@dataclass(frozen=True)
class TransactionRecord:
    """Immutable snapshot of a transaction, detached from the session."""

    id: int
    user_id: int
    amount: float
    kind: str
    category: str
    description: str
    occurred_at: datetime


class TransactionStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def fetch(
        self,
        user_id: int,
        *,
        kind: str | None = None,
        category: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        newest_first: bool = False,
        limit: int | None = None,
    ) -> list[TransactionRecord]:
        """Return a user's transactions, oldest first unless ``newest_first``.

        Both date bounds are inclusive. Database failures surface as
        :class:`UpstreamFetchError`.
        """
        query = select(Transaction).where(Transaction.user_id == user_id)
        if kind:
            query = query.where(Transaction.type == kind)
        if category:
            query = query.where(Transaction.category == category)
        if date_from:
            query = query.where(Transaction.date >= date_from)
        if date_to:
            query = query.where(Transaction.date <= date_to)

        if newest_first:
            query = query.order_by(
                Transaction.date.desc(), Transaction.created_at.desc(), Transaction.id.desc()
            )
        else:
            query = query.order_by(Transaction.date.asc(), Transaction.id.asc())
        if limit is not None:
            query = query.limit(limit)

        try:
            result = await self.db.execute(query)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Transaction fetch failed", user_id=user_id, error=str(e))
            raise UpstreamFetchError() from e

        return [self._to_record(txn) for txn in rows]

    async def totals_by_kind(
        self,
        user_id: int,
        *,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> dict[str, float]:
        """Sum of amounts per kind, computed in the database.

        Kinds without transactions in the range report ``0.0``.
        """
        query = (
            select(Transaction.type, func.sum(Transaction.amount).label("total"))
            .where(Transaction.user_id == user_id)
            .group_by(Transaction.type)
        )
        if date_from:
            query = query.where(Transaction.date >= date_from)
        if date_to:
            query = query.where(Transaction.date <= date_to)

        try:
            rows = (await self.db.execute(query)).all()
        except SQLAlchemyError as e:
            logger.error("Transaction totals failed", user_id=user_id, error=str(e))
            raise UpstreamFetchError() from e

        totals = dict.fromkeys(TRANSACTION_TYPES, 0.0)
        for kind, total in rows:
            totals[kind] = float(total or 0)
        return totals

    @staticmethod
    def _to_record(txn: Transaction) -> TransactionRecord:
        occurred_at = txn.date
        if occurred_at.tzinfo is not None:
            occurred_at = occurred_at.astimezone(timezone.utc)
        return TransactionRecord(
            id=txn.id,
            user_id=txn.user_id,
            amount=float(txn.amount),
            kind=txn.type,
            category=txn.category,
            description=txn.description,
            occurred_at=occurred_at,
        )
