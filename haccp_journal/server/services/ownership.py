"""
Ownership checks shared by the API routers.

Rows belong to the user whose id they carry, directly or through the
establishment they are attached to.
"""

from __future__ import annotations

from typing import Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from haccp_journal.core.database.entities.establishments import Establishment, Personnel
from haccp_journal.core.errors import forbidden, not_found

from .deps import AuthUser

RowType = TypeVar("RowType", bound=SQLModel)


async def get_owned(
    session: AsyncSession,
    model: Type[RowType],
    row_id: int,
    user: AuthUser,
    label: str,
    allow_admin: bool = False,
) -> RowType:
    """
    Load a row carrying ``user_id`` and check that the caller owns it.

    Args:
        session: Database session
        model: Entity class with a ``user_id`` column
        row_id: Primary key
        user: Authenticated caller
        label: Human readable name used in messages and the ``<LABEL>_NOT_FOUND`` code
        allow_admin: Let administrators access rows of any user

    Raises:
        ApiError: 404 when missing, 403 ``FORBIDDEN`` when owned by someone else
    """
    row = await session.get(model, row_id)
    if row is None:
        raise not_found(f"{label.upper().replace(' ', '_')}_NOT_FOUND", f"{label.capitalize()} not found")
    if getattr(row, "user_id") != user.id and not (allow_admin and user.is_admin):
        raise forbidden(f"You do not have permission to access this {label}")
    return row


async def get_owned_establishment(
    session: AsyncSession,
    establishment_id: int,
    user: AuthUser,
    forbidden_code: str = "FORBIDDEN",
) -> Establishment:
    """Load an establishment owned by the caller (404 / 403 otherwise)."""
    establishment = await session.get(Establishment, establishment_id)
    if establishment is None:
        raise not_found("ESTABLISHMENT_NOT_FOUND", "Establishment not found")
    if establishment.user_id != user.id:
        raise forbidden("You do not have access to this establishment", code=forbidden_code)
    return establishment


async def check_optional_establishment(
    session: AsyncSession,
    establishment_id: Optional[int],
    user: AuthUser,
) -> None:
    """Validate an optional establishment reference of an owned row."""
    if establishment_id is not None:
        await get_owned_establishment(session, establishment_id, user, forbidden_code="ESTABLISHMENT_ACCESS_DENIED")


async def get_owned_personnel(session: AsyncSession, personnel_id: int, user: AuthUser) -> Personnel:
    """Load an employee whose establishment belongs to the caller (404 / 403 otherwise)."""
    person = await session.get(Personnel, personnel_id)
    if person is None:
        raise not_found("PERSONNEL_NOT_FOUND", "Personnel not found")
    establishment = await session.get(Establishment, person.establishment_id)
    if establishment is None or establishment.user_id != user.id:
        raise forbidden()
    return person
