from fastapi import Depends

from app.config import Settings, get_settings
from app.database.mongo import get_database
from app.repositories.account_repository import AccountStore, MongoAccountStore
from app.services.account_service import AccountService


def get_account_store(settings: Settings = Depends(get_settings)) -> AccountStore:
    return MongoAccountStore(get_database(), settings.APP_MONGO_QUERY_TIMEOUT_MS)


def get_account_service(
    store: AccountStore = Depends(get_account_store),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    return AccountService(store, settings.DEFAULT_LIMIT)
