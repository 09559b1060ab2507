"""
Request Dependencies.

Database session and authenticated-caller dependencies shared by all API
routers. The bearer token is validated on every request; the account must
still exist, otherwise the token is treated as invalid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from haccp_journal.core.database.entities.users import User
from haccp_journal.core.database.session import get_session
from haccp_journal.core.errors import forbidden, unauthorized
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.domain.enums import UserRole
from haccp_journal.core.security import decode_access_token
from haccp_journal.server.core.config import settings

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


@dataclass(frozen=True)
class AuthUser:
    """Caller identity resolved from the access token."""

    id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin.value


async def get_current_user(
    session: SessionDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthUser:
    """
    Resolve the caller from the ``Authorization: Bearer`` header.

    Raises:
        ApiError: 401 ``UNAUTHORIZED`` for a missing, malformed, expired or
            orphaned token
    """
    if credentials is None or not credentials.credentials:
        raise unauthorized()

    auth = settings.auth
    try:
        payload = decode_access_token(credentials.credentials, auth.jwt_secret, auth.jwt_algorithm)
    except jwt.PyJWTError as e:
        logger.debug(f"Rejected access token: {e}")
        raise unauthorized() from e

    user = await session.get(User, payload["user_id"])
    if user is None:
        raise unauthorized()
    return AuthUser(id=user.id, email=user.email, role=user.role)


async def get_admin_user(user: AuthUser = Depends(get_current_user)) -> AuthUser:
    """Require the ``admin`` role."""
    if not user.is_admin:
        raise forbidden("Forbidden - Admin access required")
    return user


CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
AdminUser = Annotated[AuthUser, Depends(get_admin_user)]
