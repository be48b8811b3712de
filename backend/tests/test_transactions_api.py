"""Transaction endpoint tests (service faked)."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.api.v1.transactions import get_transaction_service
from app.core.exceptions import NotFoundError
from app.main import app
from factories import FIXED_NOW


class FakeTransactionService:
    def __init__(self):
        self.created = []
        self.deleted = []

    async def create_transaction(self, data, user):
        self.created.append(data)
        return SimpleNamespace(
            id=10,
            user_id=user.id,
            amount=data.amount,
            type=data.type,
            category=data.category,
            description=data.description,
            date=data.date or FIXED_NOW,
            created_at=FIXED_NOW,
        )

    async def delete_transaction(self, transaction_id, user):
        if transaction_id != 10:
            raise NotFoundError("Transaction")
        self.deleted.append(transaction_id)


@pytest.fixture
def service(client):
    fake = FakeTransactionService()
    app.dependency_overrides[get_transaction_service] = lambda: fake
    return fake


@pytest.mark.asyncio
async def test_create(client, service):
    response = await client.post(
        "/api/v1/transactions",
        json={"amount": "42.10", "type": "expense", "category": "Food", "description": "Groceries"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["id"] == 10
    assert Decimal(str(data["amount"])) == Decimal("42.10")
    assert service.created[0].category == "Food"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"amount": "0", "type": "expense", "category": "Food", "description": "x"},
        {"amount": "-5", "type": "expense", "category": "Food", "description": "x"},
        {"amount": "5", "type": "transfer", "category": "Food", "description": "x"},
        {"amount": "5", "type": "income", "category": "   ", "description": "x"},
        {"amount": "5.001", "type": "income", "category": "Gift", "description": "x"},
    ],
)
async def test_create_rejects_invalid_payload(client, service, payload):
    response = await client.post("/api/v1/transactions", json=payload)
    assert response.status_code == 422
    assert service.created == []


@pytest.mark.asyncio
async def test_delete(client, service):
    response = await client.delete("/api/v1/transactions/10")
    assert response.status_code == 204
    assert service.deleted == [10]


@pytest.mark.asyncio
async def test_delete_unknown(client, service):
    response = await client.delete("/api/v1/transactions/11")
    assert response.status_code == 404
    assert response.json()["detail"] == "Transaction not found"
