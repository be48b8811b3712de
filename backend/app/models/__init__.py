"""SQLAlchemy models."""

from app.models.base import Base
from app.models.transaction import Transaction
from app.models.user import User

__all__ = [
    "Base",
    "User",
    "Transaction",
]
