"""Shared test fixtures."""

from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_cache, get_clock, get_current_user, get_transaction_store
from app.core.cache import TTLCache
from app.main import app
from factories import FIXED_NOW, InMemoryTransactionStore


@pytest.fixture
def store():
    return InMemoryTransactionStore()


@pytest.fixture
def cache():
    return TTLCache(default_ttl=120)


@pytest.fixture
def current_user():
    return SimpleNamespace(
        id=1,
        email="alice@example.com",
        full_name="Alice",
        is_active=True,
        is_admin=False,
        created_at=FIXED_NOW,
    )


@pytest.fixture
async def client(store, cache, current_user):
    """Async test client with auth, store, clock and cache overridden."""
    app.dependency_overrides[get_current_user] = lambda: current_user
    app.dependency_overrides[get_transaction_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    app.dependency_overrides[get_cache] = lambda: cache
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
