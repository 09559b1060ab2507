"""API tests for the administration endpoints."""

from datetime import date, timedelta
from unittest.mock import patch

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from haccp_journal.core.database.entities import IncomingControl, TemperatureLog, TemperatureReading, User
from test.settings import test_settings
from test.unit_test.factories import (
    auth_headers,
    make_business,
    make_device,
    make_establishment,
    make_personnel,
    make_user,
)

TODAY = date(2024, 9, 1)


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("GET", "/api/v1/admin/users"),
        ("GET", "/api/v1/admin/businesses"),
        ("GET", "/api/v1/admin/establishments"),
        ("GET", "/api/v1/admin/diary-devices"),
        ("GET", "/api/v1/admin/temperature-readings"),
        ("GET", "/api/v1/admin/incoming-controls"),
        ("GET", "/api/v1/admin/health-books-expiring"),
        ("DELETE", "/api/v1/admin/users/1"),
    ],
)
async def test_requires_admin_role(client: AsyncClient, owner: User, method, path):
    response = await client.request(method, path, headers=auth_headers(owner))
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden - Admin access required", "code": "FORBIDDEN"}


class TestUsers:
    async def test_list_with_filters(self, client: AsyncClient, session: AsyncSession, owner: User, admin: User):
        await make_user(session, email="pending@example.com", is_active=False)

        page = (await client.get("/api/v1/admin/users", headers=auth_headers(admin))).json()
        assert page["total"] == 3

        pending = await client.get("/api/v1/admin/users", params={"is_active": "false"}, headers=auth_headers(admin))
        assert [u["email"] for u in pending.json()["items"]] == ["pending@example.com"]

        admins = await client.get("/api/v1/admin/users", params={"role": "admin"}, headers=auth_headers(admin))
        assert admins.json()["total"] == 1

    async def test_create_user(self, client: AsyncClient, admin: User):
        body = {
            "email": "Moderator@Example.com",
            "password": test_settings.auth.password,
            "role": "moderator",
            "manager_name": "Moderator",
        }

        created = await client.post("/api/v1/admin/users", json=body, headers=auth_headers(admin))
        assert created.status_code == 201
        assert created.json()["email"] == "moderator@example.com"
        assert created.json()["is_active"] is True

        login = await client.post(
            "/api/v1/auth/login", json={"email": body["email"], "password": test_settings.auth.password}
        )
        assert login.status_code == 200

        duplicate = await client.post("/api/v1/admin/users", json=body, headers=auth_headers(admin))
        assert duplicate.status_code == 409
        assert duplicate.json()["code"] == "EMAIL_EXISTS"

    async def test_create_user_with_unknown_role(self, client: AsyncClient, admin: User):
        body = {"email": "x@example.com", "password": "secret123", "role": "root", "manager_name": "X"}
        response = await client.post("/api/v1/admin/users", json=body, headers=auth_headers(admin))
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ROLE"

    async def test_update_user(self, client: AsyncClient, owner: User, other_user: User, admin: User):
        url = f"/api/v1/admin/users/{owner.id}"

        updated = await client.put(
            url, json={"role": "moderator", "password": "new-password"}, headers=auth_headers(admin)
        )
        assert updated.status_code == 200
        assert updated.json()["role"] == "moderator"
        login = await client.post("/api/v1/auth/login", json={"email": owner.email, "password": "new-password"})
        assert login.status_code == 200

        taken = await client.put(url, json={"email": other_user.email}, headers=auth_headers(admin))
        assert taken.status_code == 409

        empty = await client.put(url, json={}, headers=auth_headers(admin))
        assert empty.json()["code"] == "NO_UPDATE_FIELDS"

        missing = await client.put("/api/v1/admin/users/999", json={"role": "user"}, headers=auth_headers(admin))
        assert missing.json()["code"] == "USER_NOT_FOUND"

    async def test_activation_allows_login(self, client: AsyncClient, session: AsyncSession, admin: User):
        pending = await make_user(session, email="pending@example.com", is_active=False)
        credentials = {"email": pending.email, "password": test_settings.auth.password}
        assert (await client.post("/api/v1/auth/login", json=credentials)).status_code == 403

        response = await client.put(
            f"/api/v1/admin/users/{pending.id}/activate", json={"is_active": True}, headers=auth_headers(admin)
        )

        assert response.status_code == 200
        assert response.json()["is_active"] is True
        assert (await client.post("/api/v1/auth/login", json=credentials)).status_code == 200

    async def test_delete_user(self, client: AsyncClient, session: AsyncSession, admin: User):
        user = await make_user(session, email="leaving@example.com")

        deleted = await client.delete(f"/api/v1/admin/users/{user.id}", headers=auth_headers(admin))
        assert deleted.json() == {"message": "User deleted successfully", "id": user.id}

        again = await client.delete(f"/api/v1/admin/users/{user.id}", headers=auth_headers(admin))
        assert again.status_code == 404
        assert again.json()["code"] == "USER_NOT_FOUND"

    async def test_cannot_delete_self(self, client: AsyncClient, admin: User):
        response = await client.delete(f"/api/v1/admin/users/{admin.id}", headers=auth_headers(admin))
        assert response.status_code == 400
        assert response.json()["code"] == "CANNOT_DELETE_SELF"


class TestBusinesses:
    async def test_search_and_sort(self, client: AsyncClient, session: AsyncSession, owner: User, admin: User):
        await make_business(session, owner, name="Alpha Grill", city="Sofia")
        await make_business(session, owner, name="Beta Cafe", city="Varna")

        by_city = await client.get("/api/v1/admin/businesses", params={"search": "varna"}, headers=auth_headers(admin))
        assert [b["name"] for b in by_city.json()["items"]] == ["Beta Cafe"]

        sorted_page = await client.get(
            "/api/v1/admin/businesses", params={"sort": "name", "order": "asc"}, headers=auth_headers(admin)
        )
        assert [b["name"] for b in sorted_page.json()["items"]] == ["Alpha Grill", "Beta Cafe"]

        bad_sort = await client.get("/api/v1/admin/businesses", params={"sort": "secret"}, headers=auth_headers(admin))
        assert bad_sort.json()["code"] == "INVALID_SORT"

    async def test_delete_removes_logs(self, client: AsyncClient, session: AsyncSession, owner: User, admin: User):
        business = await make_business(session, owner)
        session.add(
            TemperatureLog(
                business_id=business.id, equipment_type="freezer", equipment_number=1, temperature=-20, log_date=TODAY
            )
        )
        await session.commit()

        response = await client.delete(f"/api/v1/admin/businesses/{business.id}", headers=auth_headers(admin))

        assert response.json() == {"message": "Business deleted successfully", "id": business.id}
        assert (await session.execute(select(TemperatureLog))).scalars().all() == []
        missing = await client.delete(f"/api/v1/admin/businesses/{business.id}", headers=auth_headers(admin))
        assert missing.json()["code"] == "BUSINESS_NOT_FOUND"


class TestEstablishments:
    async def test_list_filters(
        self, client: AsyncClient, session: AsyncSession, owner: User, other_user: User, admin: User
    ):
        await make_establishment(session, owner, company_name="Sea Breeze OOD")
        await make_establishment(
            session, other_user, company_name="Mountain Hut EOOD", establishment_type="Механа"
        )

        page = (await client.get("/api/v1/admin/establishments", headers=auth_headers(admin))).json()
        assert page["total"] == 2

        taverns = await client.get(
            "/api/v1/admin/establishments", params={"establishment_type": "Механа"}, headers=auth_headers(admin)
        )
        assert [e["company_name"] for e in taverns.json()["items"]] == ["Mountain Hut EOOD"]

        by_name = await client.get(
            "/api/v1/admin/establishments", params={"company_name": "breeze"}, headers=auth_headers(admin)
        )
        assert by_name.json()["total"] == 1

    async def test_detail_and_delete(self, client: AsyncClient, session: AsyncSession, owner: User, admin: User):
        establishment = await make_establishment(session, owner)
        await make_personnel(session, establishment)
        url = f"/api/v1/admin/establishments/{establishment.id}"

        detail = (await client.get(url, headers=auth_headers(admin))).json()
        assert detail["establishment"]["id"] == establishment.id
        assert [p["full_name"] for p in detail["personnel"]] == ["Maria Ivanova"]

        deleted = await client.delete(url, headers=auth_headers(admin))
        assert deleted.json() == {"message": "Establishment deleted successfully", "id": establishment.id}
        assert (await client.get(url, headers=auth_headers(admin))).json()["code"] == "ESTABLISHMENT_NOT_FOUND"


class TestDevicesAndReadings:
    async def test_devices(self, client: AsyncClient, session: AsyncSession, owner: User, admin: User):
        establishment = await make_establishment(session, owner)
        device = await make_device(session, owner, establishment)
        session.add(TemperatureReading(device_id=device.id, reading_date=TODAY, hour=10, temperature=2.0))
        await session.commit()

        listed = await client.get(
            "/api/v1/admin/diary-devices", params={"user_id": owner.id}, headers=auth_headers(admin)
        )
        assert [d["id"] for d in listed.json()["items"]] == [device.id]
        detail = await client.get(f"/api/v1/admin/diary-devices/{device.id}", headers=auth_headers(admin))
        assert detail.json()["device_name"] == "Fridge 1"

        deleted = await client.delete(f"/api/v1/admin/diary-devices/{device.id}", headers=auth_headers(admin))
        assert deleted.json() == {"message": "Device deleted successfully", "id": device.id}
        assert (await session.execute(select(TemperatureReading))).scalars().all() == []
        missing = await client.get(f"/api/v1/admin/diary-devices/{device.id}", headers=auth_headers(admin))
        assert missing.json()["code"] == "DEVICE_NOT_FOUND"

    async def test_readings(self, client: AsyncClient, session: AsyncSession, owner: User, admin: User):
        device = await make_device(session, owner, await make_establishment(session, owner))
        for offset in range(3):
            session.add(
                TemperatureReading(
                    device_id=device.id,
                    reading_date=TODAY - timedelta(days=offset),
                    hour=10,
                    temperature=1.0 + offset,
                )
            )
        await session.commit()

        page = (
            await client.get(
                "/api/v1/admin/temperature-readings",
                params={"device_id": device.id, "start_date": "2024-08-31"},
                headers=auth_headers(admin),
            )
        ).json()

        assert page["total"] == 2
        assert [r["reading_date"] for r in page["items"]] == ["2024-09-01", "2024-08-31"]


async def test_incoming_controls(client: AsyncClient, session: AsyncSession, owner: User, admin: User):
    for day in (TODAY, TODAY - timedelta(days=1)):
        session.add(IncomingControl(user_id=owner.id, control_date=day, image_url="https://cdn.example.com/a.jpg"))
    await session.commit()

    everything = (await client.get("/api/v1/admin/incoming-controls", headers=auth_headers(admin))).json()
    assert [c["control_date"] for c in everything["items"]] == ["2024-09-01", "2024-08-31"]

    one_day = await client.get(
        "/api/v1/admin/incoming-controls", params={"date": "2024-08-31"}, headers=auth_headers(admin)
    )
    assert one_day.json()["total"] == 1


async def test_expiring_health_books(client: AsyncClient, session: AsyncSession, owner: User, admin: User):
    establishment = await make_establishment(session, owner, contact_email="office@example.com")
    for name, days in [("Expired", -1), ("Today", 0), ("Soon", 3), ("Edge", 10), ("Later", 11)]:
        await make_personnel(session, establishment, full_name=name, health_book_validity=TODAY + timedelta(days=days))

    with patch("haccp_journal.server.api.v1.admin.today", return_value=TODAY):
        response = await client.get("/api/v1/admin/health-books-expiring", headers=auth_headers(admin))

    assert response.status_code == 200
    data = response.json()
    assert [(p["full_name"], p["days_until_expiry"]) for p in data] == [("Today", 0), ("Soon", 3), ("Edge", 10)]
    assert {p["company_name"] for p in data} == {"Bistro Sofia EOOD"}
    assert {p["contact_email"] for p in data} == {"office@example.com"}
