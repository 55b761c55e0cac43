"""
PawMart Backend — Account Endpoint Tests
==========================================

What we test:
    ✅ /users routes keep their {"data": ...} envelope
    ✅ Registration is public and round-trips through GET /users
    ✅ An unconfigured database turns storage routes into 500s, not crashes
"""

import pytest
from httpx import ASGITransport, AsyncClient

from pawmart.database import MongoDatabase
from pawmart.main import create_app


class TestUsers:

    @pytest.mark.asyncio
    async def test_empty_list_is_enveloped(self, test_client):
        response = await test_client.get("/users")
        assert response.status_code == 200
        assert response.json() == {"data": []}

    @pytest.mark.asyncio
    async def test_register_then_list(self, test_client):
        account = {"email": "carol@example.com", "uid": "uid-carol", "name": "Carol"}
        created = await test_client.post("/users", json=account)
        assert created.status_code == 200
        ack = created.json()["data"]
        assert ack["acknowledged"] is True

        users = (await test_client.get("/users")).json()["data"]
        assert len(users) == 1
        assert users[0]["_id"] == ack["insertedId"]
        assert users[0]["name"] == "Carol"

    @pytest.mark.asyncio
    async def test_register_without_email_is_400(self, test_client):
        response = await test_client.post("/users", json={"name": "Nobody"})
        assert response.status_code == 400


class TestUnconfiguredDatabase:

    @pytest.mark.asyncio
    async def test_storage_routes_fail_and_liveness_still_answers(self, identity_provider):
        app = create_app(database=MongoDatabase(client=None), identity_provider=identity_provider)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            users = await client.get("/users")
            listings = await client.get("/listings")
            root = await client.get("/")

        assert users.status_code == 500
        assert users.json()["error"] == "server_error"
        assert listings.status_code == 500
        assert root.status_code == 200
