"""POST /subscription: public newsletter sign-up."""

from fastapi import APIRouter, Depends

from pawmart.database import MongoDatabase, get_database
from pawmart.schemas.common import ErrorResponse, InsertAck
from pawmart.schemas.subscription import SubscriptionCreate
from pawmart.services.subscription_service import subscription_service

router = APIRouter(tags=["Subscriptions"])


@router.post(
    "/subscription",
    response_model=InsertAck,
    responses={
        400: {"description": "Invalid body", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Subscribe an email address to the newsletter",
)
async def subscribe(
    subscription: SubscriptionCreate,
    db: MongoDatabase = Depends(get_database),
) -> InsertAck:
    return await subscription_service.subscribe(db, subscription)
