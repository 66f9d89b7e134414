from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_MONGO_URI: str = Field(min_length=1)
    APP_MONGO_DATABASE_NAME: str = Field(min_length=1)
    APP_MONGO_POOL_MIN: int = Field(ge=0)
    APP_MONGO_POOL_MAX: int = Field(gt=0)
    APP_MONGO_MAX_IDLE_TIME_SECOND: int = Field(gt=0)
    APP_MONGO_INIT_CONNECTION_TIME_SECOND: int = Field(gt=0)
    APP_MONGO_QUERY_TIMEOUT_MS: int = Field(gt=0)

    # seconds
    API_TIMEOUT: int = Field(gt=0)
    DEFAULT_LIMIT: int = Field(gt=0)

    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def check_pool_bounds(self) -> "Settings":
        if self.APP_MONGO_POOL_MIN > self.APP_MONGO_POOL_MAX:
            raise ValueError("APP_MONGO_POOL_MIN must not exceed APP_MONGO_POOL_MAX")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
