from . import api, app

from .exceptions import ResultIngestError

__all__ = [
    "app",
    "api",
    "ResultIngestError",
]
