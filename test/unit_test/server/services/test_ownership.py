"""Unit tests for ownership checks."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from haccp_journal.core.database.entities import Business, FoodItem
from haccp_journal.core.errors import ApiError
from haccp_journal.server.services.deps import AuthUser
from haccp_journal.server.services.ownership import (
    check_optional_establishment,
    get_owned,
    get_owned_establishment,
    get_owned_personnel,
)
from test.unit_test.factories import (
    make_business,
    make_establishment,
    make_food_item,
    make_personnel,
    make_user,
)


def _caller(user, role: str = "user") -> AuthUser:
    return AuthUser(id=user.id, email=user.email, role=role)


class TestGetOwned:
    async def test_owner_gets_row(self, session: AsyncSession):
        user = await make_user(session)
        item = await make_food_item(session, user)
        assert (await get_owned(session, FoodItem, item.id, _caller(user), "food item")).id == item.id

    async def test_missing_row(self, session: AsyncSession):
        user = await make_user(session)
        with pytest.raises(ApiError) as exc_info:
            await get_owned(session, FoodItem, 404, _caller(user), "food item")
        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "FOOD_ITEM_NOT_FOUND"
        assert exc_info.value.message == "Food item not found"

    async def test_other_users_row(self, session: AsyncSession):
        owner = await make_user(session)
        other = await make_user(session, email="other@example.com")
        item = await make_food_item(session, owner)
        with pytest.raises(ApiError) as exc_info:
            await get_owned(session, FoodItem, item.id, _caller(other), "food item")
        assert exc_info.value.status_code == 403
        assert exc_info.value.code == "FORBIDDEN"

    async def test_admin_access_is_opt_in(self, session: AsyncSession):
        owner = await make_user(session)
        admin = await make_user(session, email="admin@example.com", role="admin")
        business = await make_business(session, owner)

        found = await get_owned(session, Business, business.id, _caller(admin, "admin"), "business", allow_admin=True)
        assert found.id == business.id
        with pytest.raises(ApiError):
            await get_owned(session, Business, business.id, _caller(admin, "admin"), "business")


class TestEstablishmentChecks:
    async def test_owned_establishment(self, session: AsyncSession):
        user = await make_user(session)
        establishment = await make_establishment(session, user)
        assert (await get_owned_establishment(session, establishment.id, _caller(user))).id == establishment.id

    async def test_missing_establishment(self, session: AsyncSession):
        user = await make_user(session)
        with pytest.raises(ApiError) as exc_info:
            await get_owned_establishment(session, 99, _caller(user))
        assert exc_info.value.code == "ESTABLISHMENT_NOT_FOUND"

    async def test_optional_reference_to_foreign_establishment(self, session: AsyncSession):
        owner = await make_user(session)
        other = await make_user(session, email="other@example.com")
        establishment = await make_establishment(session, owner)
        with pytest.raises(ApiError) as exc_info:
            await check_optional_establishment(session, establishment.id, _caller(other))
        assert exc_info.value.status_code == 403
        assert exc_info.value.code == "ESTABLISHMENT_ACCESS_DENIED"

    async def test_optional_reference_may_be_absent(self, session: AsyncSession):
        user = await make_user(session)
        await check_optional_establishment(session, None, _caller(user))


class TestPersonnelChecks:
    async def test_owned_personnel(self, session: AsyncSession):
        user = await make_user(session)
        person = await make_personnel(session, await make_establishment(session, user))
        assert (await get_owned_personnel(session, person.id, _caller(user))).id == person.id

    async def test_foreign_personnel(self, session: AsyncSession):
        owner = await make_user(session)
        other = await make_user(session, email="other@example.com")
        person = await make_personnel(session, await make_establishment(session, owner))
        with pytest.raises(ApiError) as exc_info:
            await get_owned_personnel(session, person.id, _caller(other))
        assert exc_info.value.status_code == 403

    async def test_missing_personnel(self, session: AsyncSession):
        user = await make_user(session)
        with pytest.raises(ApiError) as exc_info:
            await get_owned_personnel(session, 5, _caller(user))
        assert exc_info.value.code == "PERSONNEL_NOT_FOUND"
