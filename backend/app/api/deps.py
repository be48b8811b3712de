"""Shared API dependencies."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.cache import TTLCache
from app.core.clock import Clock, utc_now
from app.core.database import get_db
from app.core.security import get_current_user
from app.services.transaction_store import TransactionStore


def get_transaction_store(db: AsyncSession = Depends(get_db)) -> TransactionStore:
    return TransactionStore(db)


def get_clock() -> Clock:
    return utc_now


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


__all__ = ["get_db", "get_current_user", "get_transaction_store", "get_clock", "get_cache"]
