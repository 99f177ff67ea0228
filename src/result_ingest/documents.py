"""Stored result documents.

A stored document is the caller's JSON object merged with five synthetic
fields. The caller's keys live in ``payload``, apart from the named synthetic
fields; a payload may not use any of ``RESERVED_FIELDS``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder

RESERVED_FIELDS = frozenset({"errores", "fileInfo", "createdAt", "_insertedAt", "_id"})

PREVIEW_LENGTH = 200
PREVIEW_SUFFIX = "..."


def decode_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    """Cut ``text`` to ``length`` characters plus an ellipsis when it is longer."""
    if len(text) > length:
        return text[:length] + PREVIEW_SUFFIX
    return text


def to_jsonable(value: Any) -> Any:
    """Convert Mongo documents (ObjectId, datetime) to JSON-safe values."""
    return jsonable_encoder(value, custom_encoder={ObjectId: str})


@dataclass(frozen=True)
class FileInfo:
    """Metadata of the uploaded ``errores`` file."""
    file_name: str
    file_size: int
    file_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileName": self.file_name,
            "fileSize": self.file_size,
            "fileType": self.file_type,
        }


@dataclass
class StoredDocument:
    """Complete result document"""
    payload: Dict[str, Any]
    errores: str
    file_info: FileInfo
    created_at: datetime
    inserted_at: str
    id: Optional[ObjectId] = field(default=None)

    @classmethod
    def build(
        cls,
        payload: Mapping[str, Any],
        *,
        content: bytes,
        file_name: str,
        file_type: str,
        now: Optional[datetime] = None,
    ) -> "StoredDocument":
        now = now or datetime.now(timezone.utc)
        return cls(
            payload=dict(payload),
            errores=decode_text(content),
            file_info=FileInfo(
                file_name=file_name,
                file_size=len(content),
                file_type=file_type,
            ),
            created_at=now,
            inserted_at=now.isoformat(),
        )

    def to_mongo(self) -> Dict[str, Any]:
        """Convert to the flat dictionary persisted in MongoDB."""
        doc = dict(self.payload)
        doc.update(
            {
                "errores": self.errores,
                "fileInfo": self.file_info.to_dict(),
                "createdAt": self.created_at,
                "_insertedAt": self.inserted_at,
            }
        )
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    def to_response(self) -> Dict[str, Any]:
        """The stored document as echoed back by a write, ``errores`` previewed."""
        doc = self.to_mongo()
        doc["errores"] = preview(self.errores)
        return to_jsonable(doc)
