"""
User repository.

Data access for accounts: lookup by email for login and registration, and
the filtered listing used by the administration API.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import User
from .base import AsyncBaseRepository, QueryBuilder


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email; the lookup is case-insensitive.

        Args:
            email: Login email

        Returns:
            User instance or None
        """
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    def _search_conditions(self, filters: Dict[str, Any]) -> list:
        conditions = []
        if filters.get("role"):
            conditions.append(User.role == filters["role"])
        if filters.get("is_active") is not None:
            conditions.append(User.is_active == filters["is_active"])
        if filters.get("search"):
            conditions.append(User.email.ilike(f"%{filters['search']}%"))  # type: ignore[union-attr]
        return conditions

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[User]:
        """List users, newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: ``role``, ``is_active`` and ``search`` (email substring)

        Returns:
            List of User instances
        """
        stmt = select(User)
        for condition in self._search_conditions(filters or {}):
            stmt = stmt.where(condition)
        stmt = stmt.order_by(User.created_at.desc(), User.id.desc())  # type: ignore[union-attr]
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_matching(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count users matching the same filters as :meth:`list`."""
        return await self.count(*self._search_conditions(filters or {}))
