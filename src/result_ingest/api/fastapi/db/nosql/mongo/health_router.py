from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from result_ingest.db.health import mongo_healthcheck
from result_ingest.db.nosql.mongo.client import get_mongo_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["internal"])


@router.get("/_mongo/health", include_in_schema=False)
async def mongo_health():
    try:
        client = await get_mongo_client()
    except Exception as exc:
        logger.warning("MongoDB unreachable: %s", exc)
        return JSONResponse(status_code=503, content={"ok": False})
    ok = await mongo_healthcheck(client)
    return JSONResponse(status_code=200 if ok else 503, content={"ok": ok})
