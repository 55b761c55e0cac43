"""
PawMart Backend — Order Routes
================================

What:  GET /myOrders/{email} and POST /orders. Both require a bearer token.
Who:   The frontend "My Orders" page and the order modal on a listing page.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from pawmart.auth import AUTH_RESPONSES, require_identity
from pawmart.database import MongoDatabase, get_database
from pawmart.schemas.common import ErrorResponse, Identity, InsertAck
from pawmart.schemas.order import OrderCreate
from pawmart.services.order_service import order_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Orders"])


@router.get(
    "/myOrders/{email}",
    response_model=List[Dict[str, Any]],
    responses=AUTH_RESPONSES,
    summary="List the caller's orders",
)
async def my_orders(
    email: str,
    identity: Identity = Depends(require_identity),
    db: MongoDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await order_service.list_for_buyer(db, identity, email)


@router.post(
    "/orders",
    response_model=InsertAck,
    responses={400: {"description": "Invalid body", "model": ErrorResponse}, **AUTH_RESPONSES},
    summary="Place an order",
)
async def create_order(
    order: OrderCreate,
    identity: Identity = Depends(require_identity),
    db: MongoDatabase = Depends(get_database),
) -> InsertAck:
    return await order_service.create_order(db, order)
