"""
PawMart Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions let services and the authorization gate stay free of
       HTTP details while the global handlers in main.py still answer with the
       right status code and a consistent JSON body.
How:   Each exception class carries a message and optional context dict.
Who:   Raised by the authorization gate and the service layer.
When:  During request processing.

Exception Hierarchy:
    PawMartError (base)
    ├── ValidationError            → 400 Bad Request
    ├── MissingCredentialError     → 401 Unauthorized
    ├── InvalidCredentialError     → 403 Forbidden
    ├── OwnershipViolationError    → 403 Forbidden
    ├── ServiceUnavailableError    → 503 Service Unavailable
    └── StorageError               → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PawMartError(Exception):
    """
    Base exception for all PawMart application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; only returned where a handler says so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PawMartError):
    """
    Raised when a request body fails validation.

    When:    Missing required fields, wrong types, an empty update.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ServiceUnavailableError(PawMartError):
    """
    Raised when the identity provider could not be initialised at startup.

    This is never a statement about the caller's credential: the server
    simply cannot verify anyone, so the client should retry later.
    HTTP:    503 Service Unavailable
    """

    def __init__(
        self,
        message: str = "Authentication service not initialized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MissingCredentialError(PawMartError):
    """
    Raised when a protected route is called without an Authorization header.

    HTTP:    401 Unauthorized (with WWW-Authenticate: Bearer)
    """

    def __init__(
        self,
        message: str = "Unauthorized access",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialError(PawMartError):
    """
    Raised when the identity provider rejects the bearer token.

    When:    Expired, revoked, malformed or wrongly signed token.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class OwnershipViolationError(PawMartError):
    """
    Raised when the verified identity does not own the addressed resource.

    When:    identity.email differs from the {email} path parameter, or from
             the owner email stored on the listing being changed.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "Forbidden Access",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(PawMartError):
    """
    Raised when a MongoDB operation fails.

    When:    Connection lost, server error, malformed ObjectId, database not
             configured.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The driver
        error is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
