"""
PawMart Backend — Abstract Identity Provider Interface
========================================================

What:  Abstract base class for services that turn a bearer token into an Identity.
Why:   The authorization gate only needs "is verification possible?" and
       "who is this token for?". Keeping that behind an interface lets tests
       supply an in-process provider and keeps Firebase specifics in one module.
How:   Concrete implementations inherit from IdentityProvider and implement
       `available` and `verify()`.
Who:   Called by AuthorizationGate for every protected request.
"""

from abc import ABC, abstractmethod

from pawmart.schemas.common import Identity


class IdentityProvider(ABC):
    """
    Abstract interface for bearer-token verification.

    Contract:
        - `available` is decided once, at construction; it never flips per request
        - verify() makes exactly one verification attempt (no cache, no retry)
        - every provider-specific failure is raised as InvalidCredentialError
        - verify() on an unavailable provider raises ServiceUnavailableError
    """

    @property
    @abstractmethod
    def available(self) -> bool:
        """True when the provider initialised and can verify tokens."""
        ...

    @abstractmethod
    async def verify(self, token: str) -> Identity:
        """
        Verify a bearer token.

        Args:
            token: The credential part of the Authorization header.

        Returns:
            Identity with the provider uid, the email claim (if any) and all claims.

        Raises:
            InvalidCredentialError: Token expired, revoked, malformed or badly signed.
            ServiceUnavailableError: The provider was never initialised.
        """
        ...
