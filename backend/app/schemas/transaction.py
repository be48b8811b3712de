"""Transaction schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class TransactionCreate(BaseModel):
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    type: Literal["income", "expense"]
    category: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=200)
    date: datetime | None = None  # defaults to now

    @field_validator("category", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class TransactionUpdate(BaseModel):
    amount: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    type: Literal["income", "expense"] | None = None
    category: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1, max_length=200)
    date: datetime | None = None

    @field_validator("category", "description")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class TransactionResponse(BaseModel):
    id: int
    user_id: int
    amount: Decimal
    type: str
    category: str
    description: str
    date: datetime
    created_at: datetime

    model_config = {"from_attributes": True}


class PaginatedResponse(BaseModel):
    data: list[TransactionResponse]
    meta: dict  # {total, page, per_page, pages}
