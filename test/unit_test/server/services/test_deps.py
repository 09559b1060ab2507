"""Unit tests for authentication dependencies."""

import jwt
import pytest
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from haccp_journal.core.errors import ApiError
from haccp_journal.core.security import create_access_token
from haccp_journal.server.core.config import settings
from haccp_journal.server.services.deps import AuthUser, get_admin_user, get_current_user
from test.unit_test.factories import make_user


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    async def test_resolves_user_from_token(self, session: AsyncSession):
        user = await make_user(session, role="moderator")
        token = create_access_token(user.id, user.email, user.role, secret=settings.auth.jwt_secret)

        current = await get_current_user(session, _credentials(token))

        assert current == AuthUser(id=user.id, email=user.email, role="moderator")
        assert current.is_admin is False

    async def test_missing_credentials(self, session: AsyncSession):
        with pytest.raises(ApiError) as exc_info:
            await get_current_user(session, None)
        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "UNAUTHORIZED"

    @pytest.mark.parametrize(
        "token",
        [
            "garbage",
            jwt.encode({"user_id": 1}, "wrong-secret", algorithm="HS256"),
        ],
    )
    async def test_invalid_tokens(self, session: AsyncSession, token):
        with pytest.raises(ApiError) as exc_info:
            await get_current_user(session, _credentials(token))
        assert exc_info.value.status_code == 401

    async def test_expired_token(self, session: AsyncSession):
        user = await make_user(session)
        token = create_access_token(user.id, user.email, user.role, secret=settings.auth.jwt_secret, expire_days=-1)
        with pytest.raises(ApiError) as exc_info:
            await get_current_user(session, _credentials(token))
        assert exc_info.value.status_code == 401

    async def test_token_of_deleted_account(self, session: AsyncSession):
        token = create_access_token(999, "ghost@example.com", "admin", secret=settings.auth.jwt_secret)
        with pytest.raises(ApiError) as exc_info:
            await get_current_user(session, _credentials(token))
        assert exc_info.value.status_code == 401

    async def test_role_comes_from_database(self, session: AsyncSession):
        user = await make_user(session, role="user")
        token = create_access_token(user.id, user.email, "admin", secret=settings.auth.jwt_secret)
        current = await get_current_user(session, _credentials(token))
        assert current.is_admin is False


class TestGetAdminUser:
    async def test_admin_passes(self):
        admin = AuthUser(id=1, email="admin@example.com", role="admin")
        assert await get_admin_user(admin) is admin

    @pytest.mark.parametrize("role", ["user", "moderator"])
    async def test_non_admin_is_forbidden(self, role):
        with pytest.raises(ApiError) as exc_info:
            await get_admin_user(AuthUser(id=1, email="u@example.com", role=role))
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Forbidden - Admin access required"
