from __future__ import annotations

from typing import Iterable


class ResultIngestError(Exception):
    """Base class for every error raised by result-ingest."""


class IngestValidationError(ResultIngestError):
    """Client input rejected before anything touches the database (HTTP 400)."""

    message = "Invalid submission"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class MissingFile(IngestValidationError):
    message = 'File "errores" is required'


class MissingPayload(IngestValidationError):
    message = 'JSON data field "data" is required'


class MalformedPayload(IngestValidationError):
    message = "Invalid JSON format in data field"


class ReservedFieldCollision(IngestValidationError):
    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = sorted(fields)
        super().__init__(
            "JSON data field \"data\" uses reserved keys: " + ", ".join(self.fields)
        )


class MalformedForm(IngestValidationError):
    message = "Malformed multipart form data"


class StorageError(ResultIngestError):
    """A database round-trip failed (HTTP 500).

    ``error`` is the fixed, operation-specific summary; ``details`` carries the
    underlying exception text.
    """

    def __init__(self, error: str, details: str) -> None:
        self.error = error
        self.details = details
        super().__init__(f"{error}: {details}")

    @classmethod
    def from_exception(cls, error: str, exc: BaseException) -> "StorageError":
        return cls(error, str(exc) or type(exc).__name__)