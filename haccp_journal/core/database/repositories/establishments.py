"""
Establishment and personnel repositories.

Ownership of personnel is derived from the establishment they belong to, so
the personnel queries join on ``establishments.user_id``.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.cleaning import CleaningLog, CleaningTemplate
from ..entities.diary import DiaryDevice
from ..entities.establishments import Establishment, Personnel
from ..entities.food import FoodDiary, FoodItem
from ..entities.incoming_controls import IncomingControl
from .base import AsyncBaseRepository, QueryBuilder

# Rows that may reference an establishment without belonging to it
_OPTIONAL_ESTABLISHMENT_REFS = (DiaryDevice, IncomingControl, CleaningTemplate, CleaningLog, FoodItem, FoodDiary)


class EstablishmentRepository(AsyncBaseRepository[Establishment]):
    """Repository for establishment data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Establishment)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Establishment]:
        """List establishments, newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Equality filters (``user_id``, ``establishment_type``, ``eik``)
                plus ``company_name`` as a substring match

        Returns:
            List of Establishment instances
        """
        filters = dict(filters or {})
        company_name = filters.pop("company_name", None)
        stmt = select(Establishment)
        stmt = QueryBuilder.apply_filters(stmt, Establishment, filters)
        if company_name:
            stmt = stmt.where(Establishment.company_name.ilike(f"%{company_name}%"))  # type: ignore[attr-defined]
        stmt = stmt.order_by(Establishment.created_at.desc(), Establishment.id.desc())  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_for_user(self, user_id: int) -> int:
        """Number of establishments owned by a user."""
        return await self.count(Establishment.user_id == user_id)

    async def delete_with_personnel(self, establishment: Establishment) -> None:
        """Delete an establishment and its personnel in one transaction.

        Optional references from other rows are cleared, the rows themselves
        are kept.
        """
        personnel_ids = select(Personnel.id).where(Personnel.establishment_id == establishment.id)
        for model in (CleaningTemplate, CleaningLog):
            await self.session.execute(
                update(model).where(model.employee_id.in_(personnel_ids)).values(employee_id=None)  # type: ignore[union-attr]
            )
        for model in _OPTIONAL_ESTABLISHMENT_REFS:
            await self.session.execute(
                update(model).where(model.establishment_id == establishment.id).values(establishment_id=None)
            )
        await self.session.execute(delete(Personnel).where(Personnel.establishment_id == establishment.id))
        await self.session.delete(establishment)
        await self.session.commit()


class PersonnelRepository(AsyncBaseRepository[Personnel]):
    """Repository for personnel data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Personnel)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Personnel]:
        """List personnel ordered by name.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: ``establishment_id`` and/or ``user_id`` (owner of the establishment)

        Returns:
            List of Personnel instances
        """
        filters = filters or {}
        stmt = select(Personnel)
        if filters.get("user_id") is not None:
            stmt = stmt.join(Establishment, Establishment.id == Personnel.establishment_id).where(
                Establishment.user_id == filters["user_id"]
            )
        if filters.get("establishment_id") is not None:
            stmt = stmt.where(Personnel.establishment_id == filters["establishment_id"])
        stmt = stmt.order_by(Personnel.full_name, Personnel.id)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def expiring_between(self, today: date, days: int) -> List[tuple[Personnel, Establishment]]:
        """Personnel whose health book expires within ``days`` days from ``today``.

        Args:
            today: First day of the window (inclusive)
            days: Window length in days (inclusive end)

        Returns:
            ``(personnel, establishment)`` pairs, soonest expiry first
        """
        stmt = (
            select(Personnel, Establishment)
            .join(Establishment, Establishment.id == Personnel.establishment_id)
            .where(Personnel.health_book_validity >= today)
            .where(Personnel.health_book_validity <= today + timedelta(days=days))
            .order_by(Personnel.health_book_validity, Personnel.id)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def delete_person(self, person: Personnel) -> None:
        """Delete an employee, clearing the cleaning rows assigned to them."""
        for model in (CleaningTemplate, CleaningLog):
            await self.session.execute(update(model).where(model.employee_id == person.id).values(employee_id=None))
        await self.session.delete(person)
        await self.session.commit()
