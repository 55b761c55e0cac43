"""
PawMart Backend — Account Routes
==================================

What:  GET /users and POST /users, both public.
Note:  These two routes wrap their payload in `{"data": ...}`; the other
       collections return bare lists and acknowledgements.
"""

import logging

from fastapi import APIRouter, Depends

from pawmart.database import MongoDatabase, get_database
from pawmart.schemas.account import AccountCreate, AccountCreatedResponse, AccountListResponse
from pawmart.schemas.common import ErrorResponse
from pawmart.services.account_service import account_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.get(
    "/users",
    response_model=AccountListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List registered accounts",
)
async def list_users(db: MongoDatabase = Depends(get_database)) -> AccountListResponse:
    users = await account_service.list_accounts(db)
    return AccountListResponse(data=users)


@router.post(
    "/users",
    response_model=AccountCreatedResponse,
    responses={
        400: {"description": "Invalid account body", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register an account",
)
async def create_user(
    account: AccountCreate,
    db: MongoDatabase = Depends(get_database),
) -> AccountCreatedResponse:
    result = await account_service.create_account(db, account)
    return AccountCreatedResponse(data=result)
