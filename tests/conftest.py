"""
Shared fixtures.

The API runs against FakeDatabase, an in-memory stand-in for the handful of
Motor collection calls the routers make. No MongoDB server is needed.
"""

import copy
from types import SimpleNamespace

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from database import Database
from main import create_app


def _matches(document, query):
    for key, expected in query.items():
        if isinstance(expected, dict) and "$ne" in expected:
            if document.get(key) == expected["$ne"]:
                return False
        elif document.get(key) != expected:
            return False
    return True


class FakeCursor:
    def __init__(self, documents):
        self.documents = documents

    def sort(self, key, direction=1):
        self.documents = sorted(
            self.documents, key=lambda d: d.get(key), reverse=direction == DESCENDING
        )
        return self

    async def to_list(self, length=None):
        documents = [copy.deepcopy(d) for d in self.documents]
        return documents if length is None else documents[:length]


class FakeCollection:
    def __init__(self):
        self.documents = []
        self.unique_fields = set()
        self.indexes = []

    async def create_index(self, field, unique=False):
        self.indexes.append(field)
        if unique:
            self.unique_fields.add(field)
        return f"{field}_1"

    def _check_unique(self, document, ignore_id=None):
        for field in self.unique_fields:
            value = document.get(field)
            if value is None:
                continue
            for existing in self.documents:
                if existing["_id"] != ignore_id and existing.get(field) == value:
                    raise DuplicateKeyError(f"E11000 duplicate key error dup key: {{ {field}: {value!r} }}")

    async def insert_one(self, document):
        self._check_unique(document)
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one(self, query):
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query=None):
        return FakeCursor([d for d in self.documents if _matches(d, query or {})])

    async def count_documents(self, query):
        return len([d for d in self.documents if _matches(d, query)])

    async def update_one(self, query, update, upsert=False):
        fields = update.get("$set", {})
        for document in self.documents:
            if _matches(document, query):
                merged = {**document, **fields}
                self._check_unique(merged, ignore_id=document["_id"])
                modified = int(merged != document)
                document.update(copy.deepcopy(fields))
                return SimpleNamespace(matched_count=1, modified_count=modified, upserted_id=None)
        if not upsert:
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)
        seed = {k: v for k, v in query.items() if not isinstance(v, dict)}
        result = await self.insert_one({**seed, **copy.deepcopy(fields)})
        return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=result.inserted_id)

    async def delete_one(self, query):
        for index, document in enumerate(self.documents):
            if _matches(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def store():
    return FakeDatabase()


@pytest_asyncio.fixture
async def db(store):
    database = Database()
    database.bind(store)
    await database.ensure_indexes()
    return database


@pytest_asyncio.fixture
async def client(db):
    """HTTPX client talking to an app whose store is already bound."""
    app = create_app(db)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def unbound_client():
    app = create_app(Database())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
