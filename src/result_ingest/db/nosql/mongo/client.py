from __future__ import annotations

import asyncio
import logging

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)

from .settings import get_mongo_settings

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None
_init_lock = asyncio.Lock()


async def get_mongo_client() -> AsyncIOMotorClient:
    """Return the process-wide client, connecting on first use.

    Concurrent first callers wait on a single initialization. A failed first
    connection caches nothing, so the next caller tries again.
    """
    global _client
    if _client is not None:
        return _client

    async with _init_lock:
        if _client is None:
            settings = get_mongo_settings()
            client = AsyncIOMotorClient(settings.mongodb_uri, tz_aware=True)
            try:
                await client.admin.command("ping")
            except Exception:
                client.close()
                raise
            _client = client
            logger.info("Connected to MongoDB (database=%s)", settings.database_name)
    return _client


async def get_mongo_db() -> AsyncIOMotorDatabase:
    client = await get_mongo_client()
    return client[get_mongo_settings().database_name]


async def get_results_collection() -> AsyncIOMotorCollection:
    db = await get_mongo_db()
    return db[get_mongo_settings().collection_name]


async def dispose_mongo() -> None:
    global _client, _init_lock
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB client closed")
    # a fresh lock keeps the guard usable from a new event loop
    _init_lock = asyncio.Lock()


def is_initialized() -> bool:
    return _client is not None
