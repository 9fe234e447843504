"""Tests for material and user endpoints."""
import asyncio
import uuid

import pytest

from market_api.exceptions.api_exception import ConstraintError
from market_api.services.material_service import create_material, material_name_exists
from market_api.services.user_service import username_exists


@pytest.mark.asyncio
class TestMaterialEndpoints:
    """CRUD on /materials."""

    async def test_create_get_list(self, client):
        response = await client.post("/materials", json={"materialName": "Steel"})
        assert response.status_code == 201
        created = response.json()
        assert created["materialName"] == "Steel"
        uuid.UUID(created["id"])

        assert (await client.get(f"/materials/{created['id']}")).json() == created
        assert (await client.get("/materials")).json() == [created]

    async def test_validation_errors(self, client):
        response = await client.post("/materials", json={"materialName": "ab"})

        assert response.status_code == 400
        assert response.json() == {
            "errors": [
                {
                    "field": "materialName",
                    "message": "Material name must be at least 3 characters long",
                }
            ]
        }

    async def test_duplicate_name_rejected_by_pre_check(self, client, material):
        response = await client.post("/materials", json={"materialName": "Steel"})

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "materialName", "message": "Material name must be unique"}
        ]

    async def test_concurrent_duplicates_yield_one_success(self, client):
        """Whichever request loses the race fails at the pre-check or the unique index."""
        responses = await asyncio.gather(
            client.post("/materials", json={"materialName": "Cobalt"}),
            client.post("/materials", json={"materialName": "Cobalt"}),
        )

        assert sorted(r.status_code for r in responses) == [201, 400]
        assert len((await client.get("/materials")).json()) == 1

    async def test_rename_keeps_own_name(self, client, material):
        response = await client.put(f"/materials/{material.id}", json={"materialName": "Steel"})
        assert response.status_code == 200

        response = await client.put(f"/materials/{material.id}", json={"materialName": "Iron"})
        assert response.status_code == 200
        assert response.json()["materialName"] == "Iron"

    async def test_rename_unknown(self, client):
        response = await client.put(f"/materials/{uuid.uuid4()}", json={"materialName": "Iron"})
        assert response.status_code == 404
        assert response.json() == {"error": "Material not found"}

    async def test_delete(self, client, material):
        response = await client.delete(f"/materials/{material.id}")
        assert response.status_code == 200
        assert response.json() == {"message": "Material deleted"}

        assert (await client.delete(f"/materials/{material.id}")).status_code == 404

    async def test_delete_referenced_material(self, client, material, transaction_payload):
        await client.post("/transactions", json=transaction_payload)

        response = await client.delete(f"/materials/{material.id}")

        assert response.status_code == 400
        assert (await client.get(f"/materials/{material.id}")).status_code == 200

    async def test_malformed_id(self, client):
        response = await client.get("/materials/xyz")
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "id"


@pytest.mark.asyncio
class TestUserEndpoints:
    """CRUD on /users."""

    async def test_create_and_duplicate(self, client):
        response = await client.post("/users", json={"username": "alice"})
        assert response.status_code == 201
        assert response.json()["username"] == "alice"

        response = await client.post("/users", json={"username": "alice"})
        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "username", "message": "Username must be unique"}
        ]

    async def test_missing_username(self, client):
        response = await client.post("/users", json={})
        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "username", "message": "Username is required"}
        ]

    async def test_rename_to_taken_username(self, client, vendor, customer):
        response = await client.put(f"/users/{vendor.id}", json={"username": "northwind"})
        assert response.status_code == 400

    async def test_delete_unknown(self, client):
        response = await client.delete(f"/users/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}


@pytest.mark.asyncio
class TestLookups:
    """Lookups used by other services."""

    async def test_uniqueness_lookups(self, db_session, vendor, material):
        assert await username_exists(db_session, "acme-metals")
        assert not await username_exists(db_session, "acme-metals", exclude_id=vendor.id)
        assert await material_name_exists(db_session, "Steel")
        assert not await material_name_exists(db_session, "Brass")

    async def test_unique_index_is_authoritative(self, db_session, material):
        with pytest.raises(ConstraintError):
            await create_material(db_session, {"material_name": "Steel"})


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
