import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.config import Settings

logger = logging.getLogger(__name__)

client: AsyncIOMotorClient | None = None
db: AsyncIOMotorDatabase | None = None


async def connect(settings: Settings) -> AsyncIOMotorDatabase:
    """
    Open the shared client pool and ping the primary.

    Raises whatever the driver raises when the server cannot be reached in
    APP_MONGO_INIT_CONNECTION_TIME_SECOND, so startup aborts.
    """
    global client, db

    init_timeout_ms = settings.APP_MONGO_INIT_CONNECTION_TIME_SECOND * 1000
    client = AsyncIOMotorClient(
        settings.APP_MONGO_URI,
        minPoolSize=settings.APP_MONGO_POOL_MIN,
        maxPoolSize=settings.APP_MONGO_POOL_MAX,
        maxIdleTimeMS=settings.APP_MONGO_MAX_IDLE_TIME_SECOND * 1000,
        connectTimeoutMS=init_timeout_ms,
        serverSelectionTimeoutMS=init_timeout_ms,
    )
    database = client[settings.APP_MONGO_DATABASE_NAME]

    try:
        await database.command("ping")
    except Exception:
        logger.exception("Failed to ping MongoDB")
        client.close()
        client = None
        raise

    db = database
    logger.info(f"Connected to MongoDB database '{settings.APP_MONGO_DATABASE_NAME}'")
    return db


def get_database() -> AsyncIOMotorDatabase:
    if db is None:
        raise RuntimeError("MongoDB is not connected")
    return db


def close() -> None:
    global client, db
    if client is not None:
        logger.info("Closing MongoDB connection...")
        client.close()
    client = None
    db = None
