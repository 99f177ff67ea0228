"""
Root conftest.py for result-ingest tests.

This file provides:
1. An in-memory stand-in for the Mongo collection used by the repository
2. App / client fixtures wired to it through dependency overrides
3. Environment and process-state isolation between tests
"""

from __future__ import annotations

import asyncio
import copy
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pymongo import DESCENDING
from pymongo.errors import ServerSelectionTimeoutError


# =============================================================================
# FAKE MONGO COLLECTION
# =============================================================================


class FakeInsertOneResult:
    def __init__(self, inserted_id: ObjectId):
        self.inserted_id = inserted_id


class FakeCursor:
    """Supports the find().sort().limit().to_list() chain the repository uses."""

    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = list(documents)

    def sort(self, key: str, direction: int) -> "FakeCursor":
        self._documents.sort(key=lambda d: d[key], reverse=direction == DESCENDING)
        return self

    def limit(self, count: int) -> "FakeCursor":
        if count:
            self._documents = self._documents[:count]
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        docs = self._documents if length is None else self._documents[:length]
        return [copy.deepcopy(d) for d in docs]


class FakeCollection:
    """In-memory collection keeping inserted documents in insertion order."""

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []

    async def insert_one(self, document: Dict[str, Any]) -> FakeInsertOneResult:
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return FakeInsertOneResult(document["_id"])

    def find(self, filter: Optional[Dict[str, Any]] = None) -> FakeCursor:
        return FakeCursor(self.documents)


class FailingCollection:
    """Every call fails the way an unreachable server does."""

    def __init__(self, message: str = "connection refused"):
        self.message = message

    async def insert_one(self, document: Dict[str, Any]):
        raise ServerSelectionTimeoutError(self.message)

    def find(self, filter: Optional[Dict[str, Any]] = None):
        raise ServerSelectionTimeoutError(self.message)


# =============================================================================
# ISOLATION
# =============================================================================


@pytest.fixture(autouse=True)
def _isolated_state(monkeypatch):
    """Reset cached settings and the shared Mongo client around every test."""
    from result_ingest.app.core.env import get_env
    from result_ingest.app.settings import get_app_settings
    from result_ingest.db.nosql.mongo import client as client_mod
    from result_ingest.db.nosql.mongo.settings import get_mongo_settings

    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("MONGODB_URI", raising=False)
    monkeypatch.setattr(client_mod, "_client", None)
    monkeypatch.setattr(client_mod, "_init_lock", asyncio.Lock())

    for cached in (get_env, get_app_settings, get_mongo_settings):
        cached.cache_clear()
    yield
    for cached in (get_env, get_app_settings, get_mongo_settings):
        cached.cache_clear()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def failing_collection() -> FailingCollection:
    return FailingCollection()


@pytest.fixture
def repo(fake_collection):
    from result_ingest.db.nosql.repository import ResultRepository

    return ResultRepository(fake_collection)


def setup_repository_override(app: FastAPI, collection: Any) -> None:
    """Point the endpoint's repository dependency at ``collection``."""
    from result_ingest.api.fastapi.db.nosql.mongo.deps import get_result_repository
    from result_ingest.db.nosql.repository import ResultRepository

    app.dependency_overrides[get_result_repository] = lambda: ResultRepository(collection)


@pytest.fixture
def override_repository(app: FastAPI):
    """Swap the collection behind the endpoint, e.g. for a failing one."""

    def _override(collection: Any) -> None:
        setup_repository_override(app, collection)

    return _override


# =============================================================================
# FASTAPI APP FIXTURES
# =============================================================================


@pytest.fixture
def app(fake_collection) -> FastAPI:
    """The real application with its repository backed by ``fake_collection``."""
    from result_ingest.api.fastapi import create_app

    app = create_app()
    setup_repository_override(app, fake_collection)
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
