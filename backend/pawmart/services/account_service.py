"""
PawMart Backend — Account Service
===================================

What:  Registration records in the `users` collection.
Why:   The frontend stores a profile row after each Firebase sign-up; the
       backend only lists and inserts them, never updates or deletes.
"""

import logging
from typing import Any, Dict, List

from pawmart.database import USERS, MongoDatabase
from pawmart.schemas.account import AccountCreate
from pawmart.schemas.common import InsertAck
from pawmart.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class AccountService:

    async def list_accounts(self, db: MongoDatabase) -> List[Dict[str, Any]]:
        return await DocumentStore(db, USERS).find_many()

    async def create_account(self, db: MongoDatabase, account: AccountCreate) -> InsertAck:
        document = account.model_dump(exclude_unset=True)
        document.pop("_id", None)
        result = await DocumentStore(db, USERS).insert_one(document)
        logger.info("Account registered for %s", account.email)
        return result


account_service = AccountService()
