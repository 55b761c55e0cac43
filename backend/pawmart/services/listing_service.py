"""
PawMart Backend — Listing Service
===================================

What:  Every operation on the `listings` collection.
Why:   Listings are the only collection with public reads, owner-scoped reads,
       and owner mutations, so all the access rules live here rather than in
       the route handlers.
Who:   Called by pawmart.routes.listings.

Access rules:
    list_for_owner     identity.email must equal the {email} path parameter;
                       checked before the collection is touched
    create             when ownership is enforced, the body `email` must equal
                       identity.email
    update / delete    when ownership is enforced, the stored listing's `email`
                       must equal identity.email. A listing that does not exist
                       gives a zero-count acknowledgement, not an error.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from pawmart.auth import ensure_owner
from pawmart.database import LISTINGS, MongoDatabase
from pawmart.exceptions import ValidationError
from pawmart.schemas.common import DeleteAck, Identity, InsertAck, UpdateAck
from pawmart.schemas.listing import ListingCreate, ListingUpdate
from pawmart.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

# Fields a client may never write through a listing body
PROTECTED_FIELDS = ("_id",)


class ListingService:
    """Business logic for listings. Stateless: the handle is passed per call."""

    RECENT_LIMIT = 6
    ALL_CATEGORIES = "all"

    @staticmethod
    def _store(db: MongoDatabase) -> DocumentStore:
        return DocumentStore(db, LISTINGS)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_listings(self, db: MongoDatabase) -> List[Dict[str, Any]]:
        return await self._store(db).find_many()

    async def get_listing(self, db: MongoDatabase, listing_id: str) -> Optional[Dict[str, Any]]:
        return await self._store(db).find_by_id(listing_id)

    async def recent_listings(self, db: MongoDatabase) -> List[Dict[str, Any]]:
        """
        Newest listings first, at most RECENT_LIMIT of them.

        ObjectIds start with their creation timestamp followed by a
        per-process counter, so sorting on `_id` descending is insertion
        order, newest first.
        """
        return await self._store(db).find_many(sort=[("_id", -1)], limit=self.RECENT_LIMIT)

    async def list_for_owner(
        self, db: MongoDatabase, identity: Identity, email: str
    ) -> List[Dict[str, Any]]:
        ensure_owner(identity, email)
        return await self._store(db).find_many({"email": email})

    async def list_by_category(self, db: MongoDatabase, category: str) -> List[Dict[str, Any]]:
        """'all' in any letter case returns everything; otherwise exact categorySlug match."""
        if category.lower() == self.ALL_CATEGORIES:
            return await self._store(db).find_many()
        return await self._store(db).find_many({"categorySlug": category})

    async def search(self, db: MongoDatabase, text: Optional[str]) -> List[Dict[str, Any]]:
        """
        Case-insensitive substring match on `name`.

        The text is escaped, so characters like '.' or '(' match literally.
        Missing text is the empty pattern, which matches every listing that
        has a string `name`.
        """
        pattern = re.escape(text or "")
        return await self._store(db).find_many({"name": {"$regex": pattern, "$options": "i"}})

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_listing(
        self,
        db: MongoDatabase,
        identity: Identity,
        listing: ListingCreate,
        enforce_ownership: bool = True,
    ) -> InsertAck:
        """When ownership is enforced, the body's owner `email` must be the caller's."""
        if enforce_ownership:
            ensure_owner(identity, listing.email)

        document = listing.model_dump(exclude_unset=True)
        for field in PROTECTED_FIELDS:
            document.pop(field, None)
        result = await self._store(db).insert_one(document)
        logger.info("Listing %s created by %s", result.insertedId, listing.email)
        return result

    async def update_listing(
        self,
        db: MongoDatabase,
        identity: Identity,
        listing_id: str,
        changes: ListingUpdate,
        enforce_ownership: bool = True,
    ) -> UpdateAck:
        fields = changes.model_dump(exclude_unset=True)
        for field in PROTECTED_FIELDS:
            fields.pop(field, None)
        if not fields:
            raise ValidationError(message="No fields to update", field="body")

        store = self._store(db)
        if enforce_ownership:
            existing = await store.find_by_id(listing_id)
            if existing is None:
                return UpdateAck(acknowledged=True, matchedCount=0, modifiedCount=0)
            ensure_owner(identity, existing.get("email"))

        return await store.update_by_id(listing_id, fields)

    async def delete_listing(
        self,
        db: MongoDatabase,
        identity: Identity,
        listing_id: str,
        enforce_ownership: bool = True,
    ) -> DeleteAck:
        store = self._store(db)
        if enforce_ownership:
            existing = await store.find_by_id(listing_id)
            if existing is None:
                return DeleteAck(acknowledged=True, deletedCount=0)
            ensure_owner(identity, existing.get("email"))

        result = await store.delete_by_id(listing_id)
        logger.info("Listing %s deleted by uid=%s", listing_id, identity.uid)
        return result


# ── Singleton Instance ────────────────────────────────────────────────────
listing_service = ListingService()
