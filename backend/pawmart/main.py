"""
PawMart Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       handling and the lifecycle of the two external collaborators
       (MongoDB and Firebase) in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn pawmart.main:app) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌───────┐ ┌──────────┐   │
    │  │  Req ID  │→│ Logging  │→│ GZip  │→│  CORS    │   │
    │  └──────────┘ └──────────┘ └───────┘ └──────────┘   │
    │                                                     │
    │  Routes:  /  /users  /listings ...  /myOrders       │
    │           (protected ones depend on require_identity)│
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ Missing→401 │ Invalid/Owner→403   │
    │  Storage→500    │ AuthUnavailable→503               │
    └─────────────────────────────────────────────────────┘

Dependency injection:
    app.state.database             MongoDatabase handle
    app.state.authorization_gate   AuthorizationGate around an IdentityProvider

    create_app() accepts both collaborators; anything not supplied is built
    from settings in the lifespan. Startup failures are logged and leave the
    affected routes failing explicitly; the process keeps serving the rest.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from pawmart import __version__
from pawmart.auth import AuthorizationGate
from pawmart.config import settings
from pawmart.database import MongoDatabase
from pawmart.exceptions import (
    InvalidCredentialError,
    MissingCredentialError,
    OwnershipViolationError,
    ServiceUnavailableError,
    StorageError,
    ValidationError,
)
from pawmart.middleware.logging import RequestLoggingMiddleware
from pawmart.middleware.request_id import RequestIDMiddleware, request_id_var
from pawmart.routes import health, listings, orders, subscriptions, users
from pawmart.services.firebase_identity import FirebaseIdentityProvider
from pawmart.services.identity_base import IdentityProvider

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before the collaborators are built, so their
    initialisation warnings are visible.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Warn about missing configuration (never exit)
        3. Build the MongoDB handle and the authorization gate unless injected
    Shutdown:
        1. Close the MongoDB client
    """
    setup_logging()
    logger.info("PawMart Backend %s starting up...", __version__)

    for problem in settings.missing_required():
        logger.warning("Configuration: %s", problem)

    if getattr(app.state, "database", None) is None:
        app.state.database = MongoDatabase.from_settings(settings)

    if getattr(app.state, "authorization_gate", None) is None:
        app.state.authorization_gate = AuthorizationGate(
            FirebaseIdentityProvider(settings.fb_service_key)
        )

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("PawMart Backend shutting down...")
    await app.state.database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(
    error: str,
    message: str,
    details: Optional[dict] = None,
    request_id: Optional[str] = None,
) -> dict:
    if request_id is None:
        request_id = request_id_var.get("")
    body = {"error": error, "message": message, "request_id": request_id}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and a consistent JSON body.

    Handler table:
        ValidationError / RequestValidationError → 400
        MissingCredentialError                   → 401
        InvalidCredentialError                   → 403
        OwnershipViolationError                  → 403
        StorageError                             → 500 (generic message)
        ServiceUnavailableError                  → 503
        Exception (fallback)                     → 500
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed body or parameters, reported in the same shape as ValidationError."""
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", "Request validation failed", {"errors": errors}),
        )

    @app.exception_handler(MissingCredentialError)
    async def handle_missing_credential(request: Request, exc: MissingCredentialError):
        return JSONResponse(
            status_code=401,
            content=_error_body("unauthorized", exc.message),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(InvalidCredentialError)
    async def handle_invalid_credential(request: Request, exc: InvalidCredentialError):
        return JSONResponse(status_code=403, content=_error_body("forbidden", exc.message))

    @app.exception_handler(OwnershipViolationError)
    async def handle_ownership_violation(request: Request, exc: OwnershipViolationError):
        return JSONResponse(status_code=403, content=_error_body("forbidden", exc.message))

    @app.exception_handler(ServiceUnavailableError)
    async def handle_service_unavailable(request: Request, exc: ServiceUnavailableError):
        return JSONResponse(
            status_code=503,
            content=_error_body("service_unavailable", exc.message),
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        """Generic message to the client; driver details stay in the log."""
        logger.error(
            "[%s] Storage error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        return JSONResponse(status_code=500, content=_error_body("server_error", exc.message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Runs in ServerErrorMiddleware, outside RequestIDMiddleware, so the
        ContextVar is not visible here. The id is read back from the request
        state (shared through the ASGI scope) and the header re-attached.
        """
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error", "An unexpected error occurred.", request_id=rid
            ),
            headers={"X-Request-ID": rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    database: Optional[MongoDatabase] = None,
    identity_provider: Optional[IdentityProvider] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Pre-built storage handle. Built from settings at startup if omitted.
        identity_provider: Pre-built provider. FirebaseIdentityProvider at startup if omitted.
    """
    app = FastAPI(
        title="PawMart API",
        description="Listings, orders and subscriptions for the PawMart pet marketplace.",
        version=__version__,
        lifespan=lifespan,
    )

    if database is not None:
        app.state.database = database
    if identity_provider is not None:
        app.state.authorization_gate = AuthorizationGate(identity_provider)

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_origins_list != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(listings.router)
    app.include_router(orders.router)
    app.include_router(subscriptions.router)

    return app


# uvicorn expects `pawmart.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.backend_host, port=settings.backend_port)
