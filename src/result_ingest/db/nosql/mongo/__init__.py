from .client import (
    dispose_mongo,
    get_mongo_client,
    get_mongo_db,
    get_results_collection,
    is_initialized,
)
from .settings import COLLECTION_NAME, DATABASE_NAME, MongoSettings, get_mongo_settings

__all__ = [
    "COLLECTION_NAME",
    "DATABASE_NAME",
    "MongoSettings",
    "dispose_mongo",
    "get_mongo_client",
    "get_mongo_db",
    "get_mongo_settings",
    "get_results_collection",
    "is_initialized",
]
