"""Integration tests against a live MongoDB.

These tests require a reachable server in TEST_MONGO_URI. Each test works in a
throwaway database that is dropped afterwards. They verify:
- The unique index on account_id
- The $facet list query against the real aggregation engine
- Replace and remove semantics
"""

import os
import uuid

import pytest
from motor.motor_asyncio import AsyncIOMotorClient

from app.errors import AccountNotFoundError, DuplicateKeyError
from app.models.account import Account
from app.repositories.account_repository import MongoAccountStore

TEST_MONGO_URI = os.getenv("TEST_MONGO_URI")

pytestmark = pytest.mark.skipif(
    not TEST_MONGO_URI,
    reason="MongoDB not configured (TEST_MONGO_URI)",
)


class MongoFixture:
    async def __aenter__(self) -> MongoAccountStore:
        self.client = AsyncIOMotorClient(TEST_MONGO_URI, serverSelectionTimeoutMS=3000)
        self.db_name = f"accounts_test_{uuid.uuid4().hex[:8]}"
        store = MongoAccountStore(self.client[self.db_name], timeout_ms=3000)
        await store.ensure_indexes()
        return store

    async def __aexit__(self, *exc):
        await self.client.drop_database(self.db_name)
        self.client.close()


@pytest.mark.asyncio
async def test_round_trip():
    async with MongoFixture() as store:
        account = Account(account_id=1, limit=100, products=["b", "a"])
        await store.insert(account)

        assert await store.get(1) == account


@pytest.mark.asyncio
async def test_large_identifier_round_trip():
    async with MongoFixture() as store:
        account = Account(account_id=2**40, limit=1, products=[])
        await store.insert(account)

        assert await store.get(2**40) == account


@pytest.mark.asyncio
async def test_duplicate_insert():
    async with MongoFixture() as store:
        await store.insert(Account(account_id=1, limit=1, products=[]))

        with pytest.raises(DuplicateKeyError):
            await store.insert(Account(account_id=1, limit=2, products=[]))


@pytest.mark.asyncio
async def test_facet_count_and_window():
    async with MongoFixture() as store:
        for i in range(1, 13):
            products = ["gold"] if i % 3 else ["silver"]
            await store.insert(Account(account_id=i, limit=i * 10, products=products))

        accounts, total = await store.query("gold", -1, 3, 3)

        assert total == 8
        assert [a.account_id for a in accounts] == [7, 5, 4]


@pytest.mark.asyncio
async def test_facet_no_match():
    async with MongoFixture() as store:
        await store.insert(Account(account_id=1, limit=1, products=["gold"]))

        assert await store.query("platinum", 0, 10, 0) == ([], 0)


@pytest.mark.asyncio
async def test_replace_and_remove():
    async with MongoFixture() as store:
        await store.insert(Account(account_id=1, limit=100, products=["a"]))

        await store.replace(Account(account_id=1, limit=200, products=["c"]))
        assert await store.get(1) == Account(account_id=1, limit=200, products=["c"])

        await store.remove(1)
        with pytest.raises(AccountNotFoundError):
            await store.get(1)
        with pytest.raises(AccountNotFoundError):
            await store.remove(1)
