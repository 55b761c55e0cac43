"""
PawMart Backend — Account Schemas
===================================

What:  Body accepted by POST /users and the envelope both /users routes return.
Who:   The frontend registers an account right after a Firebase sign-up, so
       `uid` is the provider-assigned identifier and `email` its lookup key.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from pawmart.schemas.common import InsertAck


class AccountCreate(BaseModel):
    email: str = Field(min_length=1, description="Email address used to sign in")
    uid: Optional[str] = Field(default=None, description="Identity provider user id")
    name: Optional[str] = None
    photoURL: Optional[str] = None

    model_config = {"extra": "allow"}

    @field_validator("email")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class AccountListResponse(BaseModel):
    """GET /users keeps its historical `{"data": [...]}` envelope."""
    data: List[Dict[str, Any]]


class AccountCreatedResponse(BaseModel):
    """POST /users keeps its historical `{"data": {...ack}}` envelope."""
    data: InsertAck
