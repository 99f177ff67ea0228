from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from result_ingest.exceptions import IngestValidationError, StorageError

logger = logging.getLogger(__name__)


async def _validation_error_handler(request: Request, exc: IngestValidationError) -> JSONResponse:
    logger.info(
        "Rejected submission: %s",
        exc.message,
        extra={"http_method": request.method, "path": request.url.path, "status_code": 400},
    )
    return JSONResponse(status_code=400, content={"error": exc.message})


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": exc.error, "details": exc.details},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(IngestValidationError, _validation_error_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)
