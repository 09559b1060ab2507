"""API tests for business temperature logs."""

from datetime import date, timedelta
from unittest.mock import patch

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from haccp_journal.core.database.entities import TemperatureLog, User
from test.unit_test.factories import auth_headers, make_business

DAY = date(2024, 6, 10)


class TestGenerate:
    async def test_admin_generates_for_given_day(
        self, client: AsyncClient, session: AsyncSession, owner: User, admin: User
    ):
        await make_business(session, owner, refrigerator_count=2, cold_display_count=1)

        response = await client.post(
            "/api/v1/temperature-logs/generate", json={"date": DAY.isoformat()}, headers=auth_headers(admin)
        )

        assert response.status_code == 201
        assert response.json() == {
            "message": "Temperature logs generated successfully",
            "date": "2024-06-10",
            "logs_generated": 3,
            "businesses_processed": 1,
        }

        again = await client.post(
            "/api/v1/temperature-logs/generate", json={"date": DAY.isoformat()}, headers=auth_headers(admin)
        )
        assert again.json()["logs_generated"] == 0

    async def test_without_body_uses_today(self, client: AsyncClient, admin: User):
        with patch("haccp_journal.server.services.generation.today", return_value=DAY):
            response = await client.post("/api/v1/temperature-logs/generate", headers=auth_headers(admin))
        assert response.status_code == 201
        assert response.json()["date"] == "2024-06-10"

    async def test_requires_admin(self, client: AsyncClient, owner: User):
        response = await client.post("/api/v1/temperature-logs/generate", headers=auth_headers(owner))
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden - Admin access required"


class TestList:
    async def test_filters_and_paging(self, client: AsyncClient, session: AsyncSession, owner: User):
        business = await make_business(session, owner)
        for offset, (kind, temperature) in enumerate([("refrigerator", 2.0), ("freezer", -20.0), ("freezer", -19.5)]):
            session.add(
                TemperatureLog(
                    business_id=business.id,
                    equipment_type=kind,
                    equipment_number=1,
                    temperature=temperature,
                    log_date=DAY - timedelta(days=offset),
                )
            )
        await session.commit()
        url = f"/api/v1/temperature-logs/{business.id}"

        everything = await client.get(url, headers=auth_headers(owner))
        assert everything.status_code == 200
        page = everything.json()
        assert page["total"] == 3
        assert [log["log_date"] for log in page["items"]] == ["2024-06-10", "2024-06-09", "2024-06-08"]

        freezers = await client.get(
            url, params={"equipment_type": "freezer", "limit": 1}, headers=auth_headers(owner)
        )
        assert freezers.json()["total"] == 2
        assert len(freezers.json()["items"]) == 1

        ranged = await client.get(
            url, params={"start_date": "2024-06-09", "end_date": "2024-06-09"}, headers=auth_headers(owner)
        )
        assert [log["temperature"] for log in ranged.json()["items"]] == [-20.0]

    async def test_invalid_filters(self, client: AsyncClient, session: AsyncSession, owner: User):
        business = await make_business(session, owner)
        url = f"/api/v1/temperature-logs/{business.id}"

        bad_type = await client.get(url, params={"equipment_type": "oven"}, headers=auth_headers(owner))
        assert bad_type.status_code == 400
        assert bad_type.json()["code"] == "INVALID_EQUIPMENT_TYPE"
        bad_limit = await client.get(url, params={"limit": 0}, headers=auth_headers(owner))
        assert bad_limit.json()["code"] == "INVALID_LIMIT"

    async def test_ownership(self, client: AsyncClient, session: AsyncSession, owner: User, other_user: User):
        business = await make_business(session, owner)

        foreign = await client.get(f"/api/v1/temperature-logs/{business.id}", headers=auth_headers(other_user))
        assert foreign.status_code == 403
        missing = await client.get("/api/v1/temperature-logs/999", headers=auth_headers(owner))
        assert missing.status_code == 404
