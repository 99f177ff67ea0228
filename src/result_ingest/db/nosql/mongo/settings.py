from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"

# Fixed by deployment, not configurable.
DATABASE_NAME = "result-testing"
COLLECTION_NAME = "result"


class MongoSettings(BaseSettings):
    """
    MongoDB connection settings.

    Env support:
      - MONGODB_URI selects the connection string; unset or empty falls back
        to the local default.
    """

    mongodb_uri: str = Field(default=DEFAULT_MONGODB_URI)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    @property
    def database_name(self) -> str:
        return DATABASE_NAME

    @property
    def collection_name(self) -> str:
        return COLLECTION_NAME


@lru_cache
def get_mongo_settings(**kwargs) -> MongoSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return MongoSettings(**filtered)
