"""
PawMart Backend — Order Service
=================================

What:  Orders placed by signed-in buyers.
Who:   Called by pawmart.routes.orders.

Access rule:
    Only the buyer can list their orders: identity.email must equal the
    {email} path parameter. The check runs before the collection is touched.
    Orders are not linked to listings; an order may outlive its listing.
"""

import logging
from typing import Any, Dict, List

from pawmart.auth import ensure_owner
from pawmart.database import ORDERS, MongoDatabase
from pawmart.schemas.common import Identity, InsertAck
from pawmart.schemas.order import OrderCreate
from pawmart.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class OrderService:

    async def list_for_buyer(
        self, db: MongoDatabase, identity: Identity, email: str
    ) -> List[Dict[str, Any]]:
        ensure_owner(identity, email)
        return await DocumentStore(db, ORDERS).find_many({"buyerEmail": email})

    async def create_order(self, db: MongoDatabase, order: OrderCreate) -> InsertAck:
        document = order.model_dump(exclude_unset=True)
        document.pop("_id", None)
        result = await DocumentStore(db, ORDERS).insert_one(document)
        logger.info("Order %s placed by %s", result.insertedId, order.buyerEmail)
        return result


order_service = OrderService()
