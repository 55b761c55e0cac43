"""
PawMart Backend — Firebase Identity Provider
==============================================

What:  Verifies Firebase ID tokens with the Firebase Admin SDK.
Why:   The PawMart frontend signs users in with Firebase Authentication and
       sends the resulting ID token as a bearer credential.
How:   The service-account JSON arrives base64-encoded in FB_SERVICE_KEY.
       It is decoded once at startup and used to initialise a named Firebase
       app; each request then makes a single `auth.verify_id_token` call.
Who:   Instantiated once in the application lifespan; called by AuthorizationGate.

Guarded initialisation:
    A missing or unreadable key does not stop the server. The provider is
    marked unavailable, the reason is logged, and protected routes answer 503
    while public routes keep working.

Blocking call:
    `verify_id_token` is synchronous (it may fetch Google's public certificates
    over HTTP), so it runs in Starlette's thread pool to keep the event loop free.
"""

import base64
import json
import logging
from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin import exceptions as firebase_exceptions
from starlette.concurrency import run_in_threadpool

from pawmart.exceptions import InvalidCredentialError, ServiceUnavailableError
from pawmart.schemas.common import Identity
from pawmart.services.identity_base import IdentityProvider

logger = logging.getLogger(__name__)


class FirebaseIdentityProvider(IdentityProvider):
    """
    Firebase Authentication implementation of IdentityProvider.

    Error mapping:
        ValueError (empty / non-string token)          → InvalidCredentialError
        InvalidIdTokenError, ExpiredIdTokenError,
        RevokedIdTokenError, UserDisabledError,
        CertificateFetchError (all FirebaseError)      → InvalidCredentialError
        provider not initialised                       → ServiceUnavailableError
    """

    # Named app so that a second provider in the same process (e.g. a second
    # create_app()) reuses the existing Firebase app instead of failing.
    APP_NAME = "pawmart"

    def __init__(self, service_key: str = ""):
        self._app: Optional[firebase_admin.App] = None

        if not service_key:
            logger.warning(
                "FB_SERVICE_KEY env var not provided; Firebase admin not initialized"
            )
            return

        try:
            decoded = base64.b64decode(service_key).decode("utf-8")
            service_account = json.loads(decoded)
            certificate = credentials.Certificate(service_account)
        except Exception as e:
            logger.error("Failed to initialize Firebase admin: %s", str(e))
            return

        try:
            self._app = firebase_admin.initialize_app(certificate, name=self.APP_NAME)
        except ValueError:
            # initialize_app raises ValueError when the named app already exists
            self._app = firebase_admin.get_app(self.APP_NAME)

        logger.info("Firebase admin initialized")

    @property
    def available(self) -> bool:
        return self._app is not None

    async def verify(self, token: str) -> Identity:
        """
        Verify a Firebase ID token and return the caller's Identity.

        One attempt only; the outcome is not cached.
        """
        if self._app is None:
            raise ServiceUnavailableError()

        try:
            claims = await run_in_threadpool(auth.verify_id_token, token, app=self._app)
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            # Never log the token itself
            logger.info("Token rejected by Firebase: %s", type(e).__name__)
            raise InvalidCredentialError(context={"reason": type(e).__name__})

        return Identity(
            uid=claims.get("uid") or claims.get("sub", ""),
            email=claims.get("email"),
            claims=claims,
        )
