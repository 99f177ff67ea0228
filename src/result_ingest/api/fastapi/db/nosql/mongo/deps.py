from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from result_ingest.db.nosql.repository import ResultRepository


def get_result_repository() -> ResultRepository:
    return ResultRepository()


ResultRepositoryDep = Annotated[ResultRepository, Depends(get_result_repository)]
