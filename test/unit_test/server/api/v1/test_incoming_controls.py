"""API tests for incoming goods controls."""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from haccp_journal.core.database.entities import User
from test.unit_test.factories import auth_headers, make_establishment


async def _create(client: AsyncClient, user: User, **fields):
    body = {"control_date": "2024-04-02", "image_url": "https://cdn.example.com/delivery.jpg", **fields}
    return await client.post("/api/v1/incoming-controls", json=body, headers=auth_headers(user))


async def test_create_and_list(client: AsyncClient, session: AsyncSession, owner: User):
    establishment = await make_establishment(session, owner)

    created = await _create(client, owner, establishment_id=establishment.id, notes="Milk 4C")
    assert created.status_code == 201
    assert created.json()["user_id"] == owner.id
    await _create(client, owner, control_date="2024-04-05")

    listed = await client.get("/api/v1/incoming-controls", headers=auth_headers(owner))
    assert [c["control_date"] for c in listed.json()] == ["2024-04-05", "2024-04-02"]

    filtered = await client.get(
        "/api/v1/incoming-controls", params={"establishment_id": establishment.id}, headers=auth_headers(owner)
    )
    assert [c["notes"] for c in filtered.json()] == ["Milk 4C"]


async def test_create_validation(client: AsyncClient, session: AsyncSession, owner: User, other_user: User):
    foreign = await make_establishment(session, other_user)

    denied = await _create(client, owner, establishment_id=foreign.id)
    assert denied.status_code == 403
    assert denied.json()["code"] == "ESTABLISHMENT_ACCESS_DENIED"

    no_image = await _create(client, owner, image_url=" ")
    assert no_image.status_code == 400
    assert no_image.json()["code"] == "MISSING_IMAGE_URL"

    owner_field = await _create(client, owner, user_id=other_user.id)
    assert owner_field.json()["code"] == "USER_ID_NOT_ALLOWED"


async def test_update_and_delete(client: AsyncClient, owner: User, other_user: User):
    control_id = (await _create(client, owner, notes="Eggs")).json()["id"]
    url = f"/api/v1/incoming-controls/{control_id}"

    assert (await client.get(url, headers=auth_headers(other_user))).status_code == 403

    updated = await client.put(url, json={"notes": None, "control_date": "2024-04-03"}, headers=auth_headers(owner))
    assert updated.status_code == 200
    assert updated.json()["notes"] is None
    assert updated.json()["control_date"] == "2024-04-03"

    deleted = await client.delete(url, headers=auth_headers(owner))
    assert deleted.json() == {"message": "Incoming control deleted successfully", "id": control_id}
    missing = await client.get(url, headers=auth_headers(owner))
    assert missing.json()["code"] == "INCOMING_CONTROL_NOT_FOUND"
