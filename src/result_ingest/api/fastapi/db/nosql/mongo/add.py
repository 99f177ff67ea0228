from contextlib import asynccontextmanager

from fastapi import FastAPI

from result_ingest.db.nosql.mongo.client import dispose_mongo

from .health_router import router as health_router


def add_mongo(app: FastAPI, *, include_health: bool = True) -> None:
    """Close the shared MongoDB client on shutdown and mount ``/_mongo/health``.

    The client itself connects lazily on the first request that needs it.
    """
    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        try:
            yield
        finally:
            await dispose_mongo()

    app.router.lifespan_context = lifespan
    if include_health:
        app.include_router(health_router)
