from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from starlette.datastructures import UploadFile

from .db.nosql.repository import ResultRepository
from .documents import RESERVED_FIELDS, StoredDocument, to_jsonable
from .exceptions import (
    MalformedPayload,
    MissingFile,
    MissingPayload,
    ReservedFieldCollision,
    StorageError,
)

logger = logging.getLogger(__name__)

SAVE_FAILED = "Failed to save data to database"
RETRIEVE_FAILED = "Failed to retrieve data from database"
SAVED_MESSAGE = "Data and file saved successfully"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_payload(raw: Optional[str]) -> Dict[str, Any]:
    """Decode the ``data`` form field into the caller's field mapping.

    Raises:
        MissingPayload: the field is absent or empty.
        MalformedPayload: not JSON, or JSON that is not an object.
        ReservedFieldCollision: the object uses a synthetic field name.
    """
    if not raw:
        raise MissingPayload()
    try:
        value = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedPayload() from exc
    if not isinstance(value, dict):
        raise MalformedPayload('JSON data field "data" must be an object')
    reserved = RESERVED_FIELDS.intersection(value)
    if reserved:
        raise ReservedFieldCollision(reserved)
    return value


async def write_result(
    repo: ResultRepository,
    *,
    errores: Any,
    data: Any,
) -> Dict[str, Any]:
    """Validate a submission, persist it and build the 201 response body.

    ``errores`` and ``data`` are the raw form values, ``None`` when absent.
    """
    if not isinstance(errores, UploadFile):
        raise MissingFile()
    if data is not None and not isinstance(data, str):
        # a file part where the JSON text belongs
        raise MalformedPayload()
    payload = parse_payload(data)

    content = await errores.read()
    document = StoredDocument.build(
        payload,
        content=content,
        file_name=errores.filename or "",
        file_type=errores.content_type or "",
    )

    try:
        document.id = await repo.insert(document.to_mongo())
    except Exception as exc:
        logger.error("Error saving data to MongoDB: %s", exc, exc_info=True)
        raise StorageError.from_exception(SAVE_FAILED, exc) from exc

    logger.info(
        "Stored result %s (file=%s, %d bytes)",
        document.id, document.file_info.file_name, document.file_info.file_size,
    )
    return {
        "success": True,
        "message": SAVED_MESSAGE,
        "insertedId": str(document.id),
        "data": document.to_response(),
    }


async def list_recent_results(repo: ResultRepository) -> Dict[str, Any]:
    """Fetch the most recent documents, newest first, verbatim."""
    try:
        documents = await repo.list_recent()
    except Exception as exc:
        logger.error("Error retrieving data from MongoDB: %s", exc, exc_info=True)
        raise StorageError.from_exception(RETRIEVE_FAILED, exc) from exc

    return {
        "success": True,
        "count": len(documents),
        "data": to_jsonable(documents),
    }
