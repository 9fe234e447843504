"""Tests for transaction endpoints."""
import uuid
from datetime import datetime

import pytest

from market_api.services.material_service import create_material


@pytest.mark.asyncio
class TestCreateEndpoint:
    """POST /transactions."""

    async def test_create_then_get_joined(self, client, transaction_payload):
        response = await client.post("/transactions", json=transaction_payload)

        assert response.status_code == 201
        created = response.json()
        assert created["vendorId"] == transaction_payload["vendorId"]
        assert created["customerId"] == transaction_payload["customerId"]
        assert created["materialId"] == transaction_payload["materialId"]
        assert "vendor" not in created

        response = await client.get(f"/transactions/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["id"]
        assert body["vendor"] == {"username": "acme-metals"}
        assert body["customer"] == {"username": "northwind"}
        assert body["material"] == {"materialName": "Steel"}

    async def test_missing_fields_reported_in_order(self, client):
        response = await client.post("/transactions", json={"customerId": "bad"})

        assert response.status_code == 400
        assert response.json() == {
            "errors": [
                {"field": "vendorId", "message": "Vendor ID is required"},
                {"field": "customerId", "message": "Customer ID must be a valid UUID"},
                {"field": "materialId", "message": "Material ID is required"},
            ]
        }

    async def test_unknown_reference_is_client_error(self, client, transaction_payload):
        payload = {**transaction_payload, "vendorId": str(uuid.uuid4())}

        response = await client.post("/transactions", json=payload)

        assert response.status_code == 400
        assert "error" in response.json()

    async def test_body_must_be_object(self, client):
        response = await client.post("/transactions", json=["not", "an", "object"])

        assert response.status_code == 400
        assert response.json()["errors"]


@pytest.mark.asyncio
class TestReadEndpoints:
    """GET /transactions and GET /transactions/{id}."""

    async def test_list(self, client, transaction_payload):
        await client.post("/transactions", json=transaction_payload)
        await client.post("/transactions", json=transaction_payload)

        response = await client.get("/transactions")

        assert response.status_code == 200
        items = response.json()
        assert len(items) == 2
        assert all(item["material"] == {"materialName": "Steel"} for item in items)

    async def test_list_empty(self, client):
        response = await client.get("/transactions")
        assert response.status_code == 200
        assert response.json() == []

    async def test_get_unknown_id(self, client):
        response = await client.get(f"/transactions/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"error": "Transaction not found"}

    async def test_get_malformed_id(self, client):
        response = await client.get("/transactions/not-a-uuid")

        assert response.status_code == 400
        assert response.json() == {
            "errors": [{"field": "id", "message": "Transaction ID must be a valid UUID"}]
        }


@pytest.mark.asyncio
class TestUpdateEndpoint:
    """PUT /transactions/{id}."""

    async def test_update_material_only(self, client, db_session, transaction_payload):
        created = (await client.post("/transactions", json=transaction_payload)).json()
        copper = await create_material(db_session, {"material_name": "Copper"})

        response = await client.put(
            f"/transactions/{created['id']}", json={"materialId": str(copper.id)}
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["materialId"] == str(copper.id)
        assert updated["vendorId"] == created["vendorId"]
        assert updated["customerId"] == created["customerId"]
        assert datetime.fromisoformat(updated["updatedAt"]) > datetime.fromisoformat(
            created["updatedAt"]
        )

        joined = (await client.get(f"/transactions/{created['id']}")).json()
        assert joined["material"] == {"materialName": "Copper"}

    async def test_update_unknown_id(self, client, transaction_payload):
        response = await client.put(f"/transactions/{uuid.uuid4()}", json=transaction_payload)
        assert response.status_code == 404

    async def test_update_validates_id_then_body(self, client):
        response = await client.put("/transactions/42", json={"vendorId": "x"})

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["id", "vendorId"]

    async def test_update_dangling_reference(self, client, transaction_payload):
        created = (await client.post("/transactions", json=transaction_payload)).json()

        response = await client.put(
            f"/transactions/{created['id']}", json={"customerId": str(uuid.uuid4())}
        )

        assert response.status_code == 400


@pytest.mark.asyncio
class TestDeleteEndpoint:
    """DELETE /transactions/{id}."""

    async def test_delete_then_get_and_delete_again(self, client, transaction_payload):
        created = (await client.post("/transactions", json=transaction_payload)).json()

        response = await client.delete(f"/transactions/{created['id']}")
        assert response.status_code == 204
        assert response.content == b""

        assert (await client.get(f"/transactions/{created['id']}")).status_code == 404
        assert (await client.delete(f"/transactions/{created['id']}")).status_code == 404
