"""
PawMart Backend — Listing Routes
==================================

What:  All routes over the `listings` collection.
How:   Public reads take only the database handle; protected routes also
       declare `require_identity`, which runs the authorization gate before
       the handler body.

Protected:
    GET    /listing/{id}
    GET    /myListings/{email}     owner only (path email)
    DELETE /myListings/{id}        owner only (stored email) when enforced
    POST   /listings               body email must be the caller when enforced
    PATCH  /updateItem/{id}        owner only (stored email) when enforced

ENFORCE_LISTING_OWNERSHIP is read per request, so it can be flipped in
tests without rebuilding the app.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from pawmart.auth import AUTH_RESPONSES, require_identity
from pawmart.config import settings
from pawmart.database import MongoDatabase, get_database
from pawmart.schemas.common import DeleteAck, ErrorResponse, Identity, InsertAck, UpdateAck
from pawmart.schemas.listing import ListingCreate, ListingUpdate
from pawmart.services.listing_service import listing_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Listings"])

SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}


# ══════════════════════════════════════════════════════════════════════════
# Public reads
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/listings",
    response_model=List[Dict[str, Any]],
    responses=SERVER_ERROR,
    summary="List every listing",
)
async def list_listings(db: MongoDatabase = Depends(get_database)) -> List[Dict[str, Any]]:
    return await listing_service.list_listings(db)


@router.get(
    "/recent-products",
    response_model=List[Dict[str, Any]],
    responses=SERVER_ERROR,
    summary="The six most recently created listings, newest first",
)
async def recent_products(db: MongoDatabase = Depends(get_database)) -> List[Dict[str, Any]]:
    return await listing_service.recent_listings(db)


@router.get(
    "/category-filtered-product/{category}",
    response_model=List[Dict[str, Any]],
    responses=SERVER_ERROR,
    summary="Listings in one category ('all' for every listing)",
)
async def category_filtered_products(
    category: str,
    db: MongoDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await listing_service.list_by_category(db, category)


@router.get(
    "/search",
    response_model=List[Dict[str, Any]],
    responses=SERVER_ERROR,
    summary="Listings whose name contains the search text (case-insensitive)",
)
async def search_listings(
    search: Optional[str] = Query(default=None, description="Free text matched against listing names"),
    db: MongoDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await listing_service.search(db, search)


# ══════════════════════════════════════════════════════════════════════════
# Protected routes
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/listing/{listing_id}",
    response_model=Optional[Dict[str, Any]],
    responses={**AUTH_RESPONSES, **SERVER_ERROR},
    summary="One listing by id (null when it does not exist)",
)
async def get_listing(
    listing_id: str,
    identity: Identity = Depends(require_identity),
    db: MongoDatabase = Depends(get_database),
) -> Optional[Dict[str, Any]]:
    return await listing_service.get_listing(db, listing_id)


@router.get(
    "/myListings/{email}",
    response_model=List[Dict[str, Any]],
    responses={**AUTH_RESPONSES, **SERVER_ERROR},
    summary="The caller's own listings",
)
async def my_listings(
    email: str,
    identity: Identity = Depends(require_identity),
    db: MongoDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await listing_service.list_for_owner(db, identity, email)


@router.post(
    "/listings",
    response_model=InsertAck,
    responses={400: {"description": "Invalid body", "model": ErrorResponse}, **AUTH_RESPONSES},
    summary="Create a listing",
)
async def create_listing(
    listing: ListingCreate,
    identity: Identity = Depends(require_identity),
    db: MongoDatabase = Depends(get_database),
) -> InsertAck:
    return await listing_service.create_listing(
        db,
        identity,
        listing,
        enforce_ownership=settings.enforce_listing_ownership,
    )


@router.patch(
    "/updateItem/{listing_id}",
    response_model=UpdateAck,
    responses={400: {"description": "Invalid or empty body", "model": ErrorResponse}, **AUTH_RESPONSES},
    summary="Merge the given fields into a listing",
)
async def update_listing(
    listing_id: str,
    changes: ListingUpdate,
    identity: Identity = Depends(require_identity),
    db: MongoDatabase = Depends(get_database),
) -> UpdateAck:
    return await listing_service.update_listing(
        db,
        identity,
        listing_id,
        changes,
        enforce_ownership=settings.enforce_listing_ownership,
    )


@router.delete(
    "/myListings/{listing_id}",
    response_model=DeleteAck,
    responses={**AUTH_RESPONSES, **SERVER_ERROR},
    summary="Delete a listing",
)
async def delete_listing(
    listing_id: str,
    identity: Identity = Depends(require_identity),
    db: MongoDatabase = Depends(get_database),
) -> DeleteAck:
    return await listing_service.delete_listing(
        db,
        identity,
        listing_id,
        enforce_ownership=settings.enforce_listing_ownership,
    )
