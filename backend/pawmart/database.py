"""
PawMart Backend — MongoDB Handle
==================================

What:  The process-wide MongoDB handle, its lifecycle, and the FastAPI dependency.
Why:   Centralizes all connection logic in one place and keeps the client out
       of module-level global state.
How:   `MongoDatabase` wraps an async client plus a database name. It is built
       once in the application lifespan (or injected into `create_app` by
       tests), stored on `app.state.database`, and handed to route handlers via
       `get_database`. `close()` runs at shutdown.
Who:   Used by the service layer through `pawmart.services.document_store`.

Driver:
    pymongo's native asyncio client (`AsyncMongoClient`, pymongo >= 4.9).
    Any object with the same collection API can be injected instead, which is
    how the test suite runs against mongomock-motor.

Collections:
    users          registration records (accounts)
    listings       product listings
    orders         buyer orders
    subscription   newsletter sign-ups
"""

import inspect
import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from pymongo import AsyncMongoClient
from pymongo.server_api import ServerApi

from pawmart.config import Settings
from pawmart.exceptions import StorageError

logger = logging.getLogger(__name__)

USERS = "users"
LISTINGS = "listings"
ORDERS = "orders"
SUBSCRIPTIONS = "subscription"


class MongoDatabase:
    """
    Long-lived storage handle shared by every request.

    The handle is read-only after construction: requests only ever look up
    collections through it. A handle built without a client (MONGO_URI unset)
    is valid; `collection()` raises StorageError so each database route fails
    with a 500 instead of the process refusing to start.
    """

    def __init__(self, client: Optional[Any] = None, db_name: str = "petMartDB"):
        self._client = client
        self.db_name = db_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoDatabase":
        """
        Build the handle from configuration.

        Client construction does not contact the server (connections are
        opened lazily on first operation), so a bad URI is only reported
        here if pymongo rejects it syntactically.
        """
        if not settings.mongo_uri:
            logger.warning(
                "MONGO_URI not provided; skipping DB connection. Database routes will fail."
            )
            return cls(client=None, db_name=settings.mongo_db_name)

        try:
            client = AsyncMongoClient(
                settings.mongo_uri,
                server_api=ServerApi("1", strict=True, deprecation_errors=True),
            )
        except Exception as e:
            logger.error("Failed to create MongoDB client: %s", str(e))
            return cls(client=None, db_name=settings.mongo_db_name)

        logger.info("MongoDB client created for database '%s'", settings.mongo_db_name)
        return cls(client=client, db_name=settings.mongo_db_name)

    @property
    def configured(self) -> bool:
        return self._client is not None

    def collection(self, name: str):
        """Return the named collection, or raise StorageError if storage is disabled."""
        if self._client is None:
            raise StorageError(
                context={"reason": "database not configured", "collection": name},
            )
        return self._client[self.db_name][name]

    async def close(self) -> None:
        """
        What:  Closes the underlying client and its connection pool.
        When:  Called during application shutdown (lifespan handler).
        """
        if self._client is None:
            return
        # AsyncMongoClient.close() is a coroutine; mock clients close synchronously
        result = self._client.close()
        if inspect.isawaitable(result):
            await result
        self._client = None
        logger.info("MongoDB client closed")


def get_database(request: Request) -> MongoDatabase:
    """FastAPI dependency returning the handle created by the lifespan."""
    return request.app.state.database


def serialize_document(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Convert a stored document into a JSON-ready dict.

    ObjectId values (the `_id` field and any stored references) are rendered
    as their 24-character hex string; everything else passes through
    FastAPI's encoder unchanged. `None` stays `None`.
    """
    if doc is None:
        return None
    return jsonable_encoder(doc, custom_encoder={ObjectId: str})
