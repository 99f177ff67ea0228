import logging
import os
from collections import defaultdict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from result_ingest.api.fastapi.db.nosql import add_mongo
from result_ingest.api.fastapi.middleware.errors import (
    CatchAllExceptionMiddleware,
    register_error_handlers,
)
from result_ingest.api.fastapi.routers import register_all_routers
from result_ingest.api.fastapi.settings import ApiConfig
from result_ingest.app.core.env import get_env
from result_ingest.app.settings import AppSettings, get_app_settings

logger = logging.getLogger(__name__)


def _gen_operation_id_factory():
    used: dict[str, int] = defaultdict(int)

    def _gen(route: APIRoute) -> str:
        base = route.name or getattr(route.endpoint, "__name__", "op")
        method = next(iter(route.methods or ["GET"])).lower()
        candidate = base if not used[base] else f"{base}_{method}"
        used[candidate] += 1
        if used[candidate] > 1:
            candidate = f"{candidate}_{used[candidate]}"
        return candidate

    return _gen


def _cors_origins(api_config: ApiConfig) -> list[str]:
    if api_config.cors_origins:
        return api_config.cors_origins
    raw = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000")
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app(
        app_config: AppSettings | None = None,
        api_config: ApiConfig | None = None,
) -> FastAPI:
    """Build the service: routers, error handling, CORS and MongoDB wiring."""
    api_config = api_config or ApiConfig()
    app_settings = get_app_settings(
        name=app_config.name if app_config else None,
        version=app_config.version if app_config else None,
    )

    app = FastAPI(
        title=app_settings.name,
        version=app_settings.version,
        generate_unique_id_function=_gen_operation_id_factory(),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(api_config),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(CatchAllExceptionMiddleware)
    register_error_handlers(app)

    register_all_routers(app, base_package="result_ingest.api.fastapi.routers")
    if api_config.routers_path:
        register_all_routers(app, base_package=api_config.routers_path)

    add_mongo(app)

    logger.info(f"{app_settings.version} version of {app_settings.name} initialized [env: {get_env()}]")
    return app


__all__ = ["ApiConfig", "create_app"]
