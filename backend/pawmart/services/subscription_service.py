"""Newsletter sign-ups. Write-only: nothing in the API reads them back."""

import logging

from pawmart.database import SUBSCRIPTIONS, MongoDatabase
from pawmart.schemas.common import InsertAck
from pawmart.schemas.subscription import SubscriptionCreate
from pawmart.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class SubscriptionService:

    async def subscribe(self, db: MongoDatabase, subscription: SubscriptionCreate) -> InsertAck:
        document = subscription.model_dump(exclude_unset=True)
        document.pop("_id", None)
        result = await DocumentStore(db, SUBSCRIPTIONS).insert_one(document)
        logger.info("New subscription %s", result.insertedId)
        return result


subscription_service = SubscriptionService()
