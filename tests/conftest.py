"""
Global test fixtures for sharespace_init.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock / mongomock-motor)
- A fake client that also answers the admin commands mongomock lacks
- Sample documents for each collection
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from bson import ObjectId
from pymongo.errors import CollectionInvalid, OperationFailure

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


class FakeDatabase:
    """
    mongomock-motor database plus user and validator commands.

    Collections (documents, indexes) are served by mongomock; principals
    and validators are kept in plain dicts so tests can inspect them.
    """

    def __init__(self, db, name: str):
        self._db = db
        self.name = name
        self.users: dict[str, dict] = {}
        self.validators: dict[str, dict] = {}
        self.commands: list[str] = []

    def __getitem__(self, name):
        return self._db[name]

    async def list_collection_names(self):
        return list(self.validators)

    async def create_collection(self, name, **options):
        self.commands.append("create")
        if name in self.validators:
            raise CollectionInvalid(f"collection {name} already exists")
        self.validators[name] = options

    async def command(self, name, value, **kwargs):
        self.commands.append(name)
        if name == "usersInfo":
            return {"users": [self.users[value]] if value in self.users else [], "ok": 1.0}
        if name == "createUser":
            if value in self.users:
                raise OperationFailure(f"User \"{value}@{self.name}\" already exists", code=51003)
            self.users[value] = {"user": value, "db": self.name, **kwargs}
        elif name == "updateUser":
            self.users[value].update(kwargs)
        elif name == "collMod":
            self.validators[value] = kwargs
        else:
            raise NotImplementedError(name)
        return {"ok": 1.0}


class FakeClient:
    """Client handing out FakeDatabase instances by name."""

    def __init__(self, mongo_client):
        self._client = mongo_client
        self.databases: dict[str, FakeDatabase] = {}

    def __getitem__(self, name):
        if name not in self.databases:
            self.databases[name] = FakeDatabase(self._client[name], name)
        return self.databases[name]


@pytest_asyncio.fixture
async def fake_client(mock_async_mongo_client):
    """Fake client backed by mongomock-motor."""
    yield FakeClient(mock_async_mongo_client)


# =============================================================================
# Document Fixtures
# =============================================================================

@pytest.fixture
def valid_user() -> dict:
    """A minimal user document as the application stores it."""
    return {
        "username": "abc",
        "email": "a@b.com",
        "password": "12345678",
        "fullname": "Ann Bee",
        "role": "user",
        "isVerified": False,
    }


@pytest.fixture
def valid_request() -> dict:
    """A pending mentorship request between two users."""
    now = datetime.now(timezone.utc)
    return {
        "menteeId": ObjectId(),
        "mentorId": ObjectId(),
        "status": "pending",
        "topics": ["go"],
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def valid_connection() -> dict:
    """An active mentorship connection."""
    now = datetime.now(timezone.utc)
    return {
        "menteeId": ObjectId(),
        "mentorId": ObjectId(),
        "requestId": ObjectId(),
        "status": "active",
        "topics": ["go", "career"],
        "startedAt": now,
        "createdAt": now,
        "updatedAt": now,
    }
