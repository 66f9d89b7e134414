"""
Pytest configuration and fixtures for the account service tests.

This module provides:
- An in-memory AccountStore double with the same error contract as MongoAccountStore
- Settings built without touching the environment or .env
- Service fixtures and a FastAPI test client wired to the in-memory store
"""

import asyncio
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_account_store
from app.config import Settings, get_settings
from app.errors import AccountNotFoundError, DuplicateKeyError
from app.main import app
from app.models.account import Account
from app.services.account_service import AccountService


# =============================================================================
# STORE DOUBLES
# =============================================================================


class InMemoryAccountStore:
    """
    AccountStore kept in a dict.

    `query` applies the same filter to the count and to the page, mirroring the
    `$facet` aggregation.
    """

    def __init__(self):
        self.accounts: dict[int, Account] = {}
        self.queries: list[tuple[str, int, int, int]] = []

    async def query(self, product, sort_direction, limit, offset):
        self.queries.append((product, sort_direction, limit, offset))
        matched = [
            a for a in self.accounts.values()
            if not product or product in a.products
        ]
        if sort_direction:
            matched.sort(key=lambda a: a.account_id, reverse=sort_direction < 0)
        page = matched[offset:offset + limit]
        return [a.model_copy(deep=True) for a in page], len(matched)

    async def get(self, account_id):
        if account_id not in self.accounts:
            raise AccountNotFoundError(account_id)
        return self.accounts[account_id].model_copy(deep=True)

    async def insert(self, account):
        if account.account_id in self.accounts:
            raise DuplicateKeyError(account.account_id)
        self.accounts[account.account_id] = account.model_copy(deep=True)

    async def replace(self, account):
        if account.account_id not in self.accounts:
            raise AccountNotFoundError(account.account_id)
        self.accounts[account.account_id] = account.model_copy(deep=True)

    async def remove(self, account_id):
        if self.accounts.pop(account_id, None) is None:
            raise AccountNotFoundError(account_id)


class SlowAccountStore(InMemoryAccountStore):
    """Store whose reads never finish inside a short deadline."""

    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay
        self.cancelled = False

    async def get(self, account_id):
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return await super().get(account_id)


# =============================================================================
# SETTINGS
# =============================================================================


def make_settings(**overrides) -> Settings:
    values = {
        "APP_MONGO_URI": "mongodb://localhost:27017",
        "APP_MONGO_DATABASE_NAME": "accounts_test",
        "APP_MONGO_POOL_MIN": 1,
        "APP_MONGO_POOL_MAX": 5,
        "APP_MONGO_MAX_IDLE_TIME_SECOND": 30,
        "APP_MONGO_INIT_CONNECTION_TIME_SECOND": 5,
        "APP_MONGO_QUERY_TIMEOUT_MS": 1000,
        "API_TIMEOUT": 5,
        "DEFAULT_LIMIT": 10,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture
def account_service(store, settings) -> AccountService:
    return AccountService(store, settings.DEFAULT_LIMIT)


@pytest.fixture
def account_factory(store) -> Callable[..., Account]:
    """Put an account straight into the in-memory store."""

    def _create(account_id: int, limit: int = 100, products=None) -> Account:
        account = Account(account_id=account_id, limit=limit, products=products or [])
        store.accounts[account_id] = account
        return account

    return _create


# =============================================================================
# API TEST CLIENT
# =============================================================================


@pytest.fixture
def make_client():
    """
    Build a TestClient bound to a given store and settings.

    The lifespan is not entered, so no MongoDB connection is attempted.
    """

    def _make(store, settings) -> TestClient:
        app.dependency_overrides[get_account_store] = lambda: store
        app.dependency_overrides[get_settings] = lambda: settings
        client = TestClient(app, raise_server_exceptions=False)
        return client

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, store, settings) -> TestClient:
    return make_client(store, settings)
