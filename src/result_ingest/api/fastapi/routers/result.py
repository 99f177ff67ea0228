"""The ``/api/result`` endpoint.

``POST`` stores a multipart submission (file part ``errores`` plus JSON text
part ``data``); ``GET`` returns the ten most recent stored documents.
"""

from __future__ import annotations

import sys
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field
from starlette.datastructures import FormData
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from result_ingest.api.fastapi.db.nosql.mongo.deps import ResultRepositoryDep
from result_ingest.exceptions import MalformedForm
from result_ingest.service import list_recent_results, write_result

ROUTER_PREFIX = "/api"
ROUTER_TAG = "Result"

router = APIRouter()

# no cap on text part size
MAX_PART_SIZE = sys.maxsize


class WriteResponse(BaseModel):
    success: bool = True
    message: str
    insertedId: str
    data: dict[str, Any] = Field(..., description="Stored document, errores previewed to 200 chars")


class ListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    error: str


class StorageErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: str


_MULTIPART_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "required": ["errores", "data"],
                    "properties": {
                        "errores": {"type": "string", "format": "binary"},
                        "data": {"type": "string", "description": "JSON object"},
                    },
                }
            }
        },
    }
}


async def _read_form(request: Request) -> FormData:
    try:
        return await request.form(max_part_size=MAX_PART_SIZE)
    except MultiPartException as exc:
        raise MalformedForm(f"{MalformedForm.message}: {exc.message}") from exc
    except HTTPException as exc:
        # Starlette re-raises parser errors as a 400 inside an app
        if exc.status_code != 400:
            raise
        raise MalformedForm(f"{MalformedForm.message}: {exc.detail}") from exc

@router.post(
    "/result",
    response_model=WriteResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 500: {"model": StorageErrorResponse}},
    openapi_extra=_MULTIPART_BODY,
)
async def create_result(request: Request, repo: ResultRepositoryDep) -> dict:
    """Store an uploaded ``errores`` file merged with the ``data`` JSON object.

    Example:
        ```bash
        curl -X POST http://localhost:8000/api/result \\
          -F "errores=@log.txt;type=text/plain" \\
          -F 'data={"project": "alpha"}'
        ```
    """
    form = await _read_form(request)
    return await write_result(repo, errores=form.get("errores"), data=form.get("data"))


@router.get(
    "/result",
    response_model=ListResponse,
    responses={500: {"model": StorageErrorResponse}},
)
async def list_results(repo: ResultRepositoryDep) -> dict:
    """Return the 10 most recent documents, newest first."""
    return await list_recent_results(repo)
