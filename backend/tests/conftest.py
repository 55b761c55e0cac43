"""
PawMart Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (in-memory MongoDB, fake identity
       provider, API client) so no test needs a real cluster or Firebase project.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mongo_client: mongomock-motor AsyncMongoMockClient
    ├── database: MongoDatabase wrapping mongo_client
    ├── identity_provider: FakeIdentityProvider with two known users
    ├── test_client: HTTPX AsyncClient bound to create_app(database, provider)
    └── alice_headers / bob_headers: Authorization headers for the known users

Note:
    ASGITransport does not run the application lifespan, which is why the
    collaborators are injected through create_app() instead of being built
    from settings.
"""

import os
from typing import Dict, Optional

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URI"] = ""
os.environ["FB_SERVICE_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from pawmart.database import MongoDatabase
from pawmart.exceptions import InvalidCredentialError
from pawmart.main import create_app
from pawmart.schemas.common import Identity
from pawmart.services.identity_base import IdentityProvider

ALICE = Identity(uid="uid-alice", email="alice@example.com", claims={"email": "alice@example.com"})
BOB = Identity(uid="uid-bob", email="bob@example.com", claims={"email": "bob@example.com"})
PHONE_USER = Identity(uid="uid-phone", email=None, claims={"phone_number": "+15550100"})


class FakeIdentityProvider(IdentityProvider):
    """
    In-memory IdentityProvider.

    Tokens are looked up in a dict; anything unknown is rejected the way
    Firebase rejects a bad token. `calls` records every verified token.
    """

    def __init__(self, tokens: Optional[Dict[str, Identity]] = None, available: bool = True):
        self.tokens = tokens or {}
        self._available = available
        self.calls = []

    @property
    def available(self) -> bool:
        return self._available

    async def verify(self, token: str) -> Identity:
        self.calls.append(token)
        identity = self.tokens.get(token)
        if identity is None:
            raise InvalidCredentialError(context={"reason": "unknown test token"})
        return identity


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mongo_client():
    """A fresh in-memory MongoDB per test; nothing leaks between tests."""
    return AsyncMongoMockClient()


@pytest.fixture
def database(mongo_client):
    return MongoDatabase(client=mongo_client, db_name="petMartDB")


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider(
        tokens={"alice-token": ALICE, "bob-token": BOB, "phone-token": PHONE_USER}
    )


@pytest.fixture
def alice_headers():
    return bearer("alice-token")


@pytest.fixture
def bob_headers():
    return bearer("bob-token")


@pytest_asyncio.fixture
async def test_client(database, identity_provider):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_recent(test_client):
            response = await test_client.get("/recent-products")
            assert response.status_code == 200
    """
    app = create_app(database=database, identity_provider=identity_provider)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def seeded_listings(database):
    """
    Inserts a small catalogue directly into the listings collection.

    Returns the inserted ids in insertion order.
    """
    listings = database.collection("listings")
    documents = [
        {"name": "Golden Retriever Puppy", "email": "alice@example.com", "categorySlug": "pets"},
        {"name": "Salmon Dog Food", "email": "alice@example.com", "categorySlug": "pet-food"},
        {"name": "Cat Scratching Post", "email": "bob@example.com", "categorySlug": "accessories"},
        {"name": "Dog Leash (red)", "email": "bob@example.com", "categorySlug": "accessories"},
    ]
    ids = []
    for document in documents:
        result = await listings.insert_one(dict(document))
        ids.append(str(result.inserted_id))
    return ids
