"""
PawMart Backend — Order and Subscription Endpoint Tests
=========================================================

What we test:
    ✅ Placing an order and reading it back on the buyer's own list
    ✅ Orders are filtered by buyerEmail
    ✅ Invalid order bodies → 400
    ✅ Newsletter sign-up is public and stored
"""

import pytest


class TestOrders:

    @pytest.mark.asyncio
    async def test_place_then_list(self, test_client, alice_headers):
        order = {
            "buyerEmail": "alice@example.com",
            "buyerName": "Alice",
            "productId": "64b7f0c2a1b2c3d4e5f60718",
            "productName": "Salmon Dog Food",
            "quantity": 2,
        }
        created = await test_client.post("/orders", json=order, headers=alice_headers)
        assert created.status_code == 200
        order_id = created.json()["insertedId"]

        response = await test_client.get("/myOrders/alice@example.com", headers=alice_headers)
        assert response.status_code == 200
        body = response.json()
        assert len(body) == 1
        assert body[0]["_id"] == order_id
        assert body[0]["quantity"] == 2

    @pytest.mark.asyncio
    async def test_list_is_filtered_by_buyer(self, test_client, database, bob_headers):
        orders = database.collection("orders")
        await orders.insert_one({"buyerEmail": "alice@example.com", "productName": "Leash"})
        await orders.insert_one({"buyerEmail": "bob@example.com", "productName": "Collar"})

        response = await test_client.get("/myOrders/bob@example.com", headers=bob_headers)
        assert [doc["productName"] for doc in response.json()] == ["Collar"]

    @pytest.mark.asyncio
    async def test_no_orders(self, test_client, alice_headers):
        response = await test_client.get("/myOrders/alice@example.com", headers=alice_headers)
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_order_without_buyer_is_400(self, test_client, alice_headers):
        response = await test_client.post(
            "/orders", json={"productName": "Leash"}, headers=alice_headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_order_is_not_checked_against_listings(self, test_client, database, alice_headers):
        body = {"buyerEmail": "alice@example.com", "productId": "64b7f0c2a1b2c3d4e5f60718"}
        response = await test_client.post("/orders", json=body, headers=alice_headers)
        assert response.status_code == 200
        assert await database.collection("listings").count_documents({}) == 0


class TestSubscriptions:

    @pytest.mark.asyncio
    async def test_subscribe_is_public(self, test_client, database, identity_provider):
        response = await test_client.post("/subscription", json={"email": "fan@example.com"})
        assert response.status_code == 200
        assert response.json()["acknowledged"] is True
        assert identity_provider.calls == []

        stored = await database.collection("subscription").find_one({"email": "fan@example.com"})
        assert stored is not None

    @pytest.mark.asyncio
    async def test_subscribe_without_email_is_400(self, test_client):
        response = await test_client.post("/subscription", json={})
        assert response.status_code == 400
