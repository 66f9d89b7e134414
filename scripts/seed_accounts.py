import asyncio
import random
import sys
import os

# Add the app directory to the Python path
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(ROOT)

from app.config import get_settings
from app.database import mongo
from app.errors import DuplicateKeyError
from app.models.account import Account
from app.repositories.account_repository import MongoAccountStore

PRODUCTS = ["savings", "checking", "credit", "loan", "mortgage", "brokerage"]


async def seed_accounts(count: int = 50, start_id: int = 1):
    """
    Insert `count` sample accounts with ids starting at `start_id`.
    Existing ids are skipped.
    """
    settings = get_settings()
    database = await mongo.connect(settings)
    store = MongoAccountStore(database, settings.APP_MONGO_QUERY_TIMEOUT_MS)
    await store.ensure_indexes()

    print(f"▶ Seeding {count} accounts...")
    inserted = 0
    skipped = 0

    try:
        for account_id in range(start_id, start_id + count):
            account = Account(
                account_id=account_id,
                limit=random.randrange(100, 10_000, 100),
                products=random.sample(PRODUCTS, k=random.randint(1, 3)),
            )
            try:
                await store.insert(account)
                inserted += 1
            except DuplicateKeyError:
                skipped += 1
    finally:
        mongo.close()

    print(f"✔ Seeding done → {inserted} inserted, {skipped} skipped")
    return {"inserted": inserted, "skipped": skipped}


if __name__ == "__main__":
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 50
    asyncio.run(seed_accounts(count))
