from .repository import RECENT_LIMIT, ResultRepository

__all__ = [
    "RECENT_LIMIT",
    "ResultRepository",
]
