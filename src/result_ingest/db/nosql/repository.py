from __future__ import annotations

from typing import Any, Dict, List

from bson import ObjectId
from pymongo import DESCENDING

from .mongo.client import get_results_collection

RECENT_LIMIT = 10


class ResultRepository:
    """Persistence for stored result documents.

    The collection is resolved lazily so that connection failures surface
    from the repository calls themselves.
    """

    def __init__(self, collection: Any | None = None):
        self._collection = collection

    async def collection(self) -> Any:
        if self._collection is None:
            self._collection = await get_results_collection()
        return self._collection

    async def insert(self, document: Dict[str, Any]) -> ObjectId:
        """Insert one document; the driver sets ``_id`` on ``document`` in place."""
        collection = await self.collection()
        result = await collection.insert_one(document)
        return result.inserted_id

    async def list_recent(self, limit: int = RECENT_LIMIT) -> List[Dict[str, Any]]:
        collection = await self.collection()
        cursor = collection.find({}).sort("createdAt", DESCENDING).limit(limit)
        return await cursor.to_list(length=limit)
