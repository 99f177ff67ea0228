from .mongo.add import add_mongo
from .mongo.deps import ResultRepositoryDep, get_result_repository

__all__ = [
    "add_mongo",
    "ResultRepositoryDep",
    "get_result_repository",
]
