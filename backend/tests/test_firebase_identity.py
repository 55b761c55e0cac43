"""
PawMart Backend — Firebase Identity Provider Tests
====================================================

What:  Tests for FirebaseIdentityProvider initialisation and token verification.
How:   The Firebase Admin SDK is mocked; no network or real credentials.

What we test:
    ✅ Missing or unreadable FB_SERVICE_KEY leaves the provider unavailable
    ✅ A readable key initialises a named Firebase app
    ✅ Verified claims become an Identity
    ✅ SDK rejections become InvalidCredentialError
"""

import base64
import json
from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import auth as firebase_auth

from pawmart.exceptions import InvalidCredentialError, ServiceUnavailableError
from pawmart.services.firebase_identity import FirebaseIdentityProvider

MODULE = "pawmart.services.firebase_identity"


def encoded_key(payload=None) -> str:
    payload = payload or {"type": "service_account", "project_id": "pawmart-test"}
    return base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


@pytest.fixture
def firebase_sdk():
    """Patches the SDK entry points used by the provider."""
    with patch(f"{MODULE}.credentials") as mock_credentials, \
         patch(f"{MODULE}.firebase_admin") as mock_firebase_admin, \
         patch(f"{MODULE}.auth") as mock_auth:
        mock_firebase_admin.initialize_app.return_value = MagicMock(name="App")
        yield mock_credentials, mock_firebase_admin, mock_auth


class TestInitialisation:

    def test_no_key_is_unavailable(self, firebase_sdk):
        _, mock_firebase_admin, _ = firebase_sdk
        provider = FirebaseIdentityProvider("")
        assert provider.available is False
        mock_firebase_admin.initialize_app.assert_not_called()

    def test_key_that_is_not_base64_json(self, firebase_sdk):
        provider = FirebaseIdentityProvider("this is not base64 json")
        assert provider.available is False

    def test_rejected_certificate(self, firebase_sdk):
        mock_credentials, _, _ = firebase_sdk
        mock_credentials.Certificate.side_effect = ValueError("Invalid service account certificate")
        provider = FirebaseIdentityProvider(encoded_key())
        assert provider.available is False

    def test_valid_key_initialises_named_app(self, firebase_sdk):
        mock_credentials, mock_firebase_admin, _ = firebase_sdk
        provider = FirebaseIdentityProvider(encoded_key({"project_id": "pawmart-test"}))

        assert provider.available is True
        mock_credentials.Certificate.assert_called_once_with({"project_id": "pawmart-test"})
        mock_firebase_admin.initialize_app.assert_called_once_with(
            mock_credentials.Certificate.return_value, name="pawmart"
        )

    def test_existing_app_is_reused(self, firebase_sdk):
        _, mock_firebase_admin, _ = firebase_sdk
        mock_firebase_admin.initialize_app.side_effect = ValueError("already exists")
        provider = FirebaseIdentityProvider(encoded_key())

        assert provider.available is True
        mock_firebase_admin.get_app.assert_called_once_with("pawmart")


class TestVerify:

    @pytest.mark.asyncio
    async def test_unavailable_provider(self):
        provider = FirebaseIdentityProvider("")
        with pytest.raises(ServiceUnavailableError):
            await provider.verify("token")

    @pytest.mark.asyncio
    async def test_claims_become_identity(self, firebase_sdk):
        _, _, mock_auth = firebase_sdk
        mock_auth.verify_id_token.return_value = {
            "uid": "uid-alice",
            "email": "alice@example.com",
            "email_verified": True,
        }
        provider = FirebaseIdentityProvider(encoded_key())

        identity = await provider.verify("id-token")

        assert identity.uid == "uid-alice"
        assert identity.email == "alice@example.com"
        assert identity.claims["email_verified"] is True
        mock_auth.verify_id_token.assert_called_once_with("id-token", app=provider._app)

    @pytest.mark.asyncio
    async def test_identity_without_email(self, firebase_sdk):
        _, _, mock_auth = firebase_sdk
        mock_auth.verify_id_token.return_value = {"sub": "uid-phone", "phone_number": "+15550100"}
        provider = FirebaseIdentityProvider(encoded_key())

        identity = await provider.verify("id-token")

        assert identity.uid == "uid-phone"
        assert identity.email is None

    @pytest.mark.asyncio
    async def test_expired_token(self, firebase_sdk):
        _, _, mock_auth = firebase_sdk
        mock_auth.verify_id_token.side_effect = firebase_auth.ExpiredIdTokenError(
            "Token expired", cause=None
        )
        provider = FirebaseIdentityProvider(encoded_key())

        with pytest.raises(InvalidCredentialError) as exc_info:
            await provider.verify("id-token")
        assert exc_info.value.context["reason"] == "ExpiredIdTokenError"

    @pytest.mark.asyncio
    async def test_malformed_token(self, firebase_sdk):
        _, _, mock_auth = firebase_sdk
        mock_auth.verify_id_token.side_effect = ValueError("Illegal ID token provided")
        provider = FirebaseIdentityProvider(encoded_key())

        with pytest.raises(InvalidCredentialError):
            await provider.verify("garbage")
