"""
PawMart Backend — Authorization Gate
======================================

What:  Turns the Authorization header of a protected request into an Identity,
       and checks that identity against resource owners.
Why:   Every protected route needs the same four outcomes, in the same order,
       with distinct status codes for each reason a request is refused.
How:   `AuthorizationGate.authorize()` holds the decision logic; the
       `require_identity` dependency runs it for a request and stores the result
       on `request.state.identity`. Public routes simply don't declare the
       dependency.

Decision order:
    1. provider not initialised        → ServiceUnavailableError  (503)
    2. no Authorization header         → MissingCredentialError   (401)
    3. provider rejects the token      → InvalidCredentialError   (403)
    4. otherwise                       → Identity attached, request proceeds

    Step 1 runs before the header is read, so an unconfigured server never
    reports a bad credential.

Header format:
    `Authorization: <scheme> <token>`. Only the second whitespace-separated
    field is used; the scheme is not inspected.
"""

import logging
from typing import Optional

from fastapi import Header, Request

from pawmart.exceptions import (
    InvalidCredentialError,
    MissingCredentialError,
    OwnershipViolationError,
    ServiceUnavailableError,
)
from pawmart.schemas.common import ErrorResponse, Identity
from pawmart.services.identity_base import IdentityProvider

logger = logging.getLogger(__name__)

# OpenAPI documentation for routes that declare require_identity
AUTH_RESPONSES = {
    401: {"description": "Missing Authorization header", "model": ErrorResponse},
    403: {"description": "Invalid token, or not the resource owner", "model": ErrorResponse},
    503: {"description": "Authentication service not initialized", "model": ErrorResponse},
}


def extract_token(authorization: str) -> str:
    """Return the token part of an Authorization header, or "" if there is none."""
    parts = authorization.split()
    return parts[1] if len(parts) > 1 else ""


class AuthorizationGate:
    """Per-request authorization decision; holds no state across requests."""

    def __init__(self, provider: IdentityProvider):
        self.provider = provider

    async def authorize(self, authorization: Optional[str]) -> Identity:
        if not self.provider.available:
            logger.warning("Rejecting protected request: identity provider not initialized")
            raise ServiceUnavailableError()

        if not authorization:
            raise MissingCredentialError()

        token = extract_token(authorization)
        if not token:
            raise InvalidCredentialError(context={"reason": "no token in Authorization header"})

        return await self.provider.verify(token)


async def require_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> Identity:
    """
    FastAPI dependency for protected routes.

    Usage:
        @router.post("/listings")
        async def create_listing(..., identity: Identity = Depends(require_identity)):
    """
    gate: AuthorizationGate = request.app.state.authorization_gate
    identity = await gate.authorize(authorization)
    request.state.identity = identity
    return identity


def ensure_owner(identity: Identity, owner_email: Optional[str]) -> None:
    """
    Raise OwnershipViolationError unless the identity's email is `owner_email`.

    An identity without an email claim owns nothing. Comparison is exact,
    matching how emails are stored on listings and orders.
    """
    if identity.email is None or identity.email != owner_email:
        logger.info(
            "Ownership check failed for uid=%s on resource owned by %s",
            identity.uid,
            owner_email,
        )
        raise OwnershipViolationError(
            context={"uid": identity.uid, "owner": owner_email},
        )
