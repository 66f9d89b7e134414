import asyncio
import logging
from typing import Any, Awaitable, Protocol, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo import errors as mongo_errors

from app.errors import AccountNotFoundError, DuplicateKeyError, StoreError, StoreTimeoutError
from app.models.account import Account
from app.services.transcoder import decode_account, decode_list_result, encode_account

logger = logging.getLogger(__name__)

ACCOUNTS_COLLECTION_NAME = "accounts"

T = TypeVar("T")


class AccountStore(Protocol):
    async def query(
        self, product: str, sort_direction: int, limit: int, offset: int
    ) -> tuple[list[Account], int]: ...

    async def get(self, account_id: int) -> Account: ...

    async def insert(self, account: Account) -> None: ...

    async def replace(self, account: Account) -> None: ...

    async def remove(self, account_id: int) -> None: ...


def build_list_pipeline(product: str, sort_direction: int, limit: int, offset: int) -> list[dict]:
    """
    One aggregation that returns both the total count and the requested page.

    The product filter runs once, ahead of `$facet`, so the `metadata` and
    `data` branches see the same filtered input. Sorting and windowing only
    touch the `data` branch; the count is never affected by them.
    """
    pipeline: list[dict[str, Any]] = []

    if product:
        pipeline.append({"$match": {"products": product}})

    data: list[dict[str, Any]] = []
    if sort_direction:
        data.append({"$sort": {"account_id": sort_direction}})
    data.append({"$skip": offset})
    data.append({"$limit": limit})
    data.append({"$project": {"_id": 0}})

    pipeline.append({
        "$facet": {
            "metadata": [{"$count": "total_count"}],
            "data": data,
        }
    })
    return pipeline


class MongoAccountStore:
    def __init__(self, database: AsyncIOMotorDatabase, timeout_ms: int):
        self.collection: AsyncIOMotorCollection = database[ACCOUNTS_COLLECTION_NAME]
        self.timeout_ms = timeout_ms

    async def _run(self, operation: str, coro: Awaitable[T]) -> T:
        # Client-side deadline; reads also send maxTimeMS so the server gives up too.
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout_ms / 1000)
        except asyncio.TimeoutError as e:
            logger.error(f"MongoDB {operation} exceeded {self.timeout_ms}ms")
            raise StoreTimeoutError(f"{operation} timed out") from e
        except (mongo_errors.ExecutionTimeout, mongo_errors.NetworkTimeout,
                mongo_errors.ServerSelectionTimeoutError, mongo_errors.WTimeoutError) as e:
            logger.error(f"MongoDB {operation} timed out: {e}")
            raise StoreTimeoutError(f"{operation} timed out") from e
        except mongo_errors.PyMongoError as e:
            logger.error(f"MongoDB {operation} failed: {e}")
            raise StoreError(f"{operation} failed") from e

    async def ensure_indexes(self) -> None:
        await self._run(
            "create_index",
            self.collection.create_index([("account_id", ASCENDING)], unique=True),
        )

    async def query(
        self, product: str, sort_direction: int, limit: int, offset: int
    ) -> tuple[list[Account], int]:
        pipeline = build_list_pipeline(product, sort_direction, limit, offset)
        cursor = self.collection.aggregate(pipeline, maxTimeMS=self.timeout_ms)
        results = await self._run("aggregate", cursor.to_list(length=None))
        return decode_list_result(results)

    async def get(self, account_id: int) -> Account:
        doc = await self._run(
            "find_one",
            self.collection.find_one(
                {"account_id": account_id},
                {"_id": 0},
                max_time_ms=self.timeout_ms,
            ),
        )
        if doc is None:
            raise AccountNotFoundError(account_id)
        return decode_account(doc)

    async def insert(self, account: Account) -> None:
        try:
            await self._run("insert_one", self.collection.insert_one(encode_account(account)))
        except StoreError as e:
            if isinstance(e.__cause__, mongo_errors.DuplicateKeyError):
                raise DuplicateKeyError(account.account_id) from e.__cause__
            raise

    async def replace(self, account: Account) -> None:
        result = await self._run(
            "replace_one",
            self.collection.replace_one({"account_id": account.account_id}, encode_account(account)),
        )
        if result.matched_count == 0:
            raise AccountNotFoundError(account.account_id)

    async def remove(self, account_id: int) -> None:
        result = await self._run(
            "delete_one",
            self.collection.delete_one({"account_id": account_id}),
        )
        if result.deleted_count == 0:
            raise AccountNotFoundError(account_id)
