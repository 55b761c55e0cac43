"""
PawMart Backend — Document Store
==================================

What:  The five storage operations every route is built from, for one collection.
Why:   Each route is a single MongoDB call. Routing all of them through one
       class means there is exactly one place where driver failures become
       StorageError and where ObjectIds are rendered for JSON.
How:   `DocumentStore(db, name)` looks the collection up on every call, so a
       handle without a client fails per request rather than at import.

Operations:
    find_many(filter, sort, limit)   → list of serialized documents
    find_by_id(id)                   → serialized document or None
    insert_one(document)             → InsertAck
    update_by_id(id, fields)         → UpdateAck   ($set merge)
    delete_by_id(id)                 → DeleteAck

Identifiers:
    Path ids are not pre-validated by routes. A value that is not a valid
    ObjectId fails here, as a storage error (HTTP 500).
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from pawmart.database import MongoDatabase, serialize_document
from pawmart.exceptions import StorageError
from pawmart.schemas.common import DeleteAck, InsertAck, UpdateAck

logger = logging.getLogger(__name__)


def to_object_id(value: str) -> ObjectId:
    """Convert a path id to an ObjectId, failing as a storage error."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise StorageError(context={"reason": "invalid ObjectId", "id": value, "error": str(e)})


class DocumentStore:
    """One MongoDB collection, exposed through StorageError-safe async methods."""

    def __init__(self, database: MongoDatabase, collection_name: str):
        self._database = database
        self.collection_name = collection_name

    @contextmanager
    def _storage_errors(self, operation: str, **context: Any) -> Iterator[None]:
        """Translate driver exceptions raised inside the block into StorageError."""
        try:
            yield
        except PyMongoError as e:
            logger.error(
                "MongoDB %s on '%s' failed: %s", operation, self.collection_name, str(e)
            )
            raise StorageError(
                context={
                    "collection": self.collection_name,
                    "operation": operation,
                    "error_type": type(e).__name__,
                    **context,
                },
            )

    async def find_many(
        self,
        filter: Optional[Dict[str, Any]] = None,
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        collection = self._database.collection(self.collection_name)
        with self._storage_errors("find", filter=str(filter)):
            cursor = collection.find(filter or {}, sort=sort, limit=limit)
            documents = await cursor.to_list(None)
        return [serialize_document(doc) for doc in documents]

    async def find_by_id(self, doc_id: str) -> Optional[Dict[str, Any]]:
        collection = self._database.collection(self.collection_name)
        object_id = to_object_id(doc_id)
        with self._storage_errors("find_one", id=doc_id):
            document = await collection.find_one({"_id": object_id})
        return serialize_document(document)

    async def insert_one(self, document: Dict[str, Any]) -> InsertAck:
        collection = self._database.collection(self.collection_name)
        with self._storage_errors("insert_one"):
            result = await collection.insert_one(document)
        logger.info("Inserted %s into '%s'", result.inserted_id, self.collection_name)
        return InsertAck(acknowledged=result.acknowledged, insertedId=str(result.inserted_id))

    async def update_by_id(self, doc_id: str, fields: Dict[str, Any]) -> UpdateAck:
        collection = self._database.collection(self.collection_name)
        object_id = to_object_id(doc_id)
        with self._storage_errors("update_one", id=doc_id):
            result = await collection.update_one({"_id": object_id}, {"$set": fields})
        logger.info(
            "Updated %s in '%s' (matched=%d, modified=%d)",
            doc_id,
            self.collection_name,
            result.matched_count,
            result.modified_count,
        )
        return UpdateAck(
            acknowledged=result.acknowledged,
            matchedCount=result.matched_count,
            modifiedCount=result.modified_count,
            upsertedCount=1 if result.upserted_id is not None else 0,
            upsertedId=str(result.upserted_id) if result.upserted_id is not None else None,
        )

    async def delete_by_id(self, doc_id: str) -> DeleteAck:
        collection = self._database.collection(self.collection_name)
        object_id = to_object_id(doc_id)
        with self._storage_errors("delete_one", id=doc_id):
            result = await collection.delete_one({"_id": object_id})
        logger.info(
            "Deleted %s from '%s' (deleted=%d)", doc_id, self.collection_name, result.deleted_count
        )
        return DeleteAck(acknowledged=result.acknowledged, deletedCount=result.deleted_count)
