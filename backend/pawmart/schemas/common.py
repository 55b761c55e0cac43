"""
PawMart Backend — Shared Response Schemas
===========================================

What:  Storage acknowledgements, the error body, and the verified Identity.
Why:   Write routes return what MongoDB acknowledged rather than the stored
       document; the field names (`insertedId`, `deletedCount`, ...) are the
       ones the PawMart frontend already reads.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Storage Acknowledgements
# ══════════════════════════════════════════════════════════════════════════


class InsertAck(BaseModel):
    """Returned by every insert route."""
    acknowledged: bool = Field(description="Whether the server acknowledged the write")
    insertedId: str = Field(description="Generated ObjectId of the new document (hex)")


class UpdateAck(BaseModel):
    """Returned by PATCH /updateItem/{id}."""
    acknowledged: bool
    matchedCount: int = Field(description="Documents matching the id filter (0 or 1)")
    modifiedCount: int = Field(description="Documents actually changed (0 or 1)")
    upsertedCount: int = 0
    upsertedId: Optional[str] = None


class DeleteAck(BaseModel):
    """Returned by DELETE /myListings/{id}."""
    acknowledged: bool
    deletedCount: int = Field(description="Documents removed (0 or 1)")


# ══════════════════════════════════════════════════════════════════════════
# Identity
# ══════════════════════════════════════════════════════════════════════════


class Identity(BaseModel):
    """
    What:  The caller as vouched for by the identity provider.
    Who:   Produced by the AuthorizationGate; consumed by ownership checks.

    `email` may be absent for phone or anonymous sign-ins. Such identities
    pass authentication but never own anything: every ownership check
    against them fails.
    """
    uid: str = Field(description="Provider-assigned user identifier")
    email: Optional[str] = Field(default=None, description="Email claim from the token")
    claims: Dict[str, Any] = Field(default_factory=dict, description="All decoded token claims")


# ══════════════════════════════════════════════════════════════════════════
# Error Response
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "forbidden",
            "message": "Forbidden Access",
            "request_id": "5f0c2a91"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
