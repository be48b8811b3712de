"""Transaction management service.

Every write is committed before the owner's cached dashboard entries are
dropped, so a concurrent read cannot re-cache rows from before the write.
"""

from datetime import date
from math import ceil

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.cache import TTLCache
from app.core.clock import Clock, utc_now
from app.core.exceptions import NotFoundError
from app.models.transaction import Transaction
from app.models.user import User
from app.schemas.transaction import TransactionCreate, TransactionUpdate
from app.utils.dates import end_of_day, start_of_day

logger = structlog.get_logger()


class TransactionService:
    def __init__(self, db: AsyncSession, cache: TTLCache, clock: Clock = utc_now):
        self.db = db
        self.cache = cache
        self.clock = clock

    async def list_transactions(
        self,
        user: User,
        page: int = 1,
        per_page: int = 50,
        type: str | None = None,
        category: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> dict:
        """List transactions with pagination and filters, newest first."""
        query = select(Transaction).where(Transaction.user_id == user.id)
        if type:
            query = query.where(Transaction.type == type)
        if category:
            query = query.where(Transaction.category == category)
        if date_from:
            query = query.where(Transaction.date >= start_of_day(date_from))
        if date_to:
            query = query.where(Transaction.date <= end_of_day(date_to))

        total = (
            await self.db.execute(select(func.count()).select_from(query.subquery()))
        ).scalar_one()

        query = (
            query.order_by(Transaction.date.desc(), Transaction.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await self.db.execute(query)
        return {
            "data": result.scalars().all(),
            "meta": {
                "total": total,
                "page": page,
                "per_page": per_page,
                "pages": ceil(total / per_page) if per_page else 0,
            },
        }

    async def create_transaction(self, data: TransactionCreate, user: User) -> Transaction:
        txn = Transaction(
            user_id=user.id,
            amount=data.amount,
            type=data.type,
            category=data.category,
            description=data.description,
            date=data.date or self.clock(),
        )
        self.db.add(txn)
        await self.db.flush()
        await self.db.refresh(txn)
        await self._commit_and_invalidate(user)
        return txn

    async def get_transaction(self, transaction_id: int, user: User) -> Transaction:
        return await self._get_user_transaction(transaction_id, user)

    async def update_transaction(
        self,
        transaction_id: int,
        data: TransactionUpdate,
        user: User,
    ) -> Transaction:
        txn = await self._get_user_transaction(transaction_id, user)
        for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(txn, key, value)
        await self.db.flush()
        await self.db.refresh(txn)
        await self._commit_and_invalidate(user)
        return txn

    async def delete_transaction(self, transaction_id: int, user: User) -> None:
        txn = await self._get_user_transaction(transaction_id, user)
        await self.db.delete(txn)
        await self.db.flush()
        await self._commit_and_invalidate(user)

    async def _get_user_transaction(self, transaction_id: int, user: User) -> Transaction:
        """Fetch a transaction owned by ``user``; other users' rows read as missing."""
        result = await self.db.execute(
            select(Transaction).where(
                Transaction.id == transaction_id,
                Transaction.user_id == user.id,
            )
        )
        txn = result.scalar_one_or_none()
        if not txn:
            raise NotFoundError("Transaction")
        return txn

    async def _commit_and_invalidate(self, user: User) -> None:
        await self.db.commit()
        dropped = self.cache.invalidate_user(user.id)
        logger.info("Transactions changed", user_id=user.id, cache_entries_dropped=dropped)
