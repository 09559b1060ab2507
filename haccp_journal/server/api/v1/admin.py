"""
Administration Endpoints.

Every route requires the ``admin`` role. Administrators manage accounts
(including the activation of self-registered owners) and can inspect and
remove the data of all tenants.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Literal, Optional, Type

from fastapi import APIRouter, Query, status
from pydantic import BaseModel
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from haccp_journal.core.database.entities.businesses import Business
from haccp_journal.core.database.entities.diary import DiaryDevice, TemperatureReading
from haccp_journal.core.database.entities.establishments import Establishment
from haccp_journal.core.database.entities.incoming_controls import IncomingControl
from haccp_journal.core.database.entities.users import User
from haccp_journal.core.database.repositories import (
    DiaryDeviceRepository,
    EstablishmentRepository,
    PersonnelRepository,
    QueryBuilder,
    TemperatureLogRepository,
    UserRepository,
)
from haccp_journal.core.errors import bad_request, conflict, not_found
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.domain.enums import DeviceType, EstablishmentType, UserRole
from haccp_journal.core.models.io.admin import ActivationRequest, AdminUserCreate, AdminUserUpdate
from haccp_journal.core.models.io.auth import UserRead
from haccp_journal.core.models.io.businesses import BusinessRead
from haccp_journal.core.models.io.common import DeletedResponse, Page, changes_of
from haccp_journal.core.models.io.diary import DiaryDeviceRead, TemperatureReadingRead
from haccp_journal.core.models.io.establishments import (
    EstablishmentDetail,
    EstablishmentRead,
    ExpiringHealthBook,
    PersonnelRead,
)
from haccp_journal.core.models.io.records import IncomingControlRead
from haccp_journal.core.security import hash_password
from haccp_journal.server.core.config import settings
from haccp_journal.server.services.deps import AdminUser, SessionDep
from haccp_journal.server.services.generation import today

router = APIRouter(tags=["admin"])
logger = get_logger(__name__)

Order = Literal["asc", "desc"]


async def _page(
    session: AsyncSession,
    model: Type[SQLModel],
    read_model: Type[BaseModel],
    conditions: list[Any],
    sort_column: Any,
    order: str,
    limit: int,
    offset: int,
) -> Page:
    """Run a filtered, sorted and paginated listing together with its total."""
    statement = select(model)
    count_statement = select(func.count()).select_from(model)
    for condition in conditions:
        statement = statement.where(condition)
        count_statement = count_statement.where(condition)
    statement = QueryBuilder.apply_sort(statement, sort_column, order)
    statement = QueryBuilder.apply_pagination(statement, limit, offset)

    rows = (await session.execute(statement)).scalars().all()
    total = int((await session.execute(count_statement)).scalar_one())
    return Page[read_model](  # type: ignore[valid-type]
        items=[read_model.model_validate(row) for row in rows],
        total=total,
        limit=limit,
        offset=offset,
    )


# Users


@router.get(
    "/users",
    response_model=Page[UserRead],
    summary="List Users",
    description="Retrieve accounts, newest first, filtered by role, activation state or email.",
    response_description="A page of accounts.",
)
async def list_users(
    _admin: AdminUser,
    session: SessionDep,
    role: Optional[UserRole] = Query(default=None),
    is_active: Optional[bool] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Email substring"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> Page[UserRead]:
    """List accounts."""
    repo = UserRepository(session)
    filters = {"role": role.value if role else None, "is_active": is_active, "search": search}
    users = await repo.list(limit=limit, offset=offset, filters=filters)
    return Page[UserRead](
        items=[UserRead.model_validate(u) for u in users],
        total=await repo.count_matching(filters),
        limit=limit,
        offset=offset,
    )


@router.post(
    "/users",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Create an account with any role.",
    response_description="The created account.",
    responses={409: {"description": "Email already registered"}},
)
async def create_user(payload: AdminUserCreate, _admin: AdminUser, session: SessionDep) -> UserRead:
    """
    Create an account.

    - **email**: Login email, stored lower-cased.
    - **password**: At least 6 characters.
    - **role**: admin, moderator or user.
    - **is_active**: Accounts created here are active by default.
    """
    repo = UserRepository(session)
    if await repo.get_by_email(payload.email):
        raise conflict("EMAIL_EXISTS", "Email already exists")
    data = payload.model_dump(exclude={"password"})
    user = await repo.create(User(password_hash=hash_password(payload.password), **data))
    logger.info(f"Admin created user {user.id} with role {user.role}")
    return UserRead.model_validate(user)


@router.put(
    "/users/{user_id}",
    response_model=UserRead,
    summary="Update User",
    description="Partially update an account.",
    response_description="The updated account.",
    responses={404: {"description": "User not found"}, 409: {"description": "Email already registered"}},
)
async def update_user(user_id: int, payload: AdminUserUpdate, _admin: AdminUser, session: SessionDep) -> UserRead:
    """Update an account; a new password is hashed."""
    repo = UserRepository(session)
    user = await repo.get_by_id(user_id)
    if user is None:
        raise not_found("USER_NOT_FOUND", "User not found")

    changes = changes_of(payload, nullable=frozenset({"profile_image_url"}))
    if "email" in changes and changes["email"] != user.email:
        if await repo.get_by_email(changes["email"]):
            raise conflict("EMAIL_EXISTS", "Email already exists")
    if "password" in changes:
        changes["password_hash"] = hash_password(changes.pop("password"))

    user = await repo.update(user, changes)
    return UserRead.model_validate(user)


@router.put(
    "/users/{user_id}/activate",
    response_model=UserRead,
    summary="Set Activation",
    description="Activate or deactivate an account.",
    response_description="The updated account.",
    responses={404: {"description": "User not found"}},
)
async def set_activation(
    user_id: int,
    payload: ActivationRequest,
    _admin: AdminUser,
    session: SessionDep,
) -> UserRead:
    """
    Activate or deactivate an account.

    - **is_active**: ``true`` lets the owner log in.
    """
    repo = UserRepository(session)
    user = await repo.get_by_id(user_id)
    if user is None:
        raise not_found("USER_NOT_FOUND", "User not found")
    user = await repo.update(user, {"is_active": payload.is_active})
    logger.info(f"User {user_id} is_active set to {payload.is_active}")
    return UserRead.model_validate(user)


@router.delete(
    "/users/{user_id}",
    response_model=DeletedResponse,
    summary="Delete User",
    description="Delete an account that owns no data; administrators cannot delete themselves.",
    response_description="Deletion acknowledgement.",
    responses={
        400: {"description": "Attempt to delete the own account"},
        404: {"description": "User not found"},
        409: {"description": "Account still owns data"},
    },
)
async def delete_user(user_id: int, admin: AdminUser, session: SessionDep) -> DeletedResponse:
    """Delete an account."""
    if user_id == admin.id:
        raise bad_request("CANNOT_DELETE_SELF", "Cannot delete your own account")
    repo = UserRepository(session)
    if await repo.get_by_id(user_id) is None:
        raise not_found("USER_NOT_FOUND", "User not found")
    try:
        await repo.delete(user_id)
    except IntegrityError as e:
        await session.rollback()
        raise conflict("USER_HAS_DATA", "User still owns businesses, establishments or records") from e
    logger.info(f"Admin {admin.id} deleted user {user_id}")
    return DeletedResponse(message="User deleted successfully", id=user_id)


# Businesses


@router.get(
    "/businesses",
    response_model=Page[BusinessRead],
    summary="List Businesses",
    description="Retrieve all businesses, searchable by name, city or type.",
    response_description="A page of businesses.",
)
async def list_businesses(
    _admin: AdminUser,
    session: SessionDep,
    search: Optional[str] = Query(default=None, description="Name, city or type substring"),
    sort: Literal["id", "name", "city", "type", "created_at"] = Query(default="created_at"),
    order: Order = Query(default="desc"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> Page[BusinessRead]:
    """List businesses of all users."""
    conditions = []
    if search and search.strip():
        term = f"%{search.strip()}%"
        conditions.append(
            or_(Business.name.ilike(term), Business.city.ilike(term), Business.type.ilike(term))  # type: ignore[attr-defined]
        )
    return await _page(session, Business, BusinessRead, conditions, getattr(Business, sort), order, limit, offset)


@router.delete(
    "/businesses/{business_id}",
    response_model=DeletedResponse,
    summary="Delete Business",
    description="Delete a business together with all of its temperature logs.",
    response_description="Deletion acknowledgement.",
    responses={404: {"description": "Business not found"}},
)
async def delete_business(business_id: int, admin: AdminUser, session: SessionDep) -> DeletedResponse:
    """
    Delete a business and its logs.

    Both deletes run in one transaction; on failure nothing is removed.
    """
    business = await session.get(Business, business_id)
    if business is None:
        raise not_found("BUSINESS_NOT_FOUND", "Business not found")
    try:
        removed = await TemperatureLogRepository(session).delete_for_business(business_id)
        await session.delete(business)
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    logger.info(f"Admin {admin.id} deleted business {business_id} with {removed} logs")
    return DeletedResponse(message="Business deleted successfully", id=business_id)


# Establishments


@router.get(
    "/establishments",
    response_model=Page[EstablishmentRead],
    summary="List Establishments",
    description="Retrieve establishments of all users.",
    response_description="A page of establishments.",
)
async def list_establishments(
    _admin: AdminUser,
    session: SessionDep,
    company_name: Optional[str] = Query(default=None, description="Company name substring"),
    eik: Optional[str] = Query(default=None),
    establishment_type: Optional[EstablishmentType] = Query(default=None),
    sort: Literal["id", "company_name", "establishment_type", "employee_count", "created_at"] = Query(
        default="created_at"
    ),
    order: Order = Query(default="desc"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> Page[EstablishmentRead]:
    """List establishments."""
    conditions = []
    if company_name:
        conditions.append(Establishment.company_name.ilike(f"%{company_name}%"))  # type: ignore[attr-defined]
    if eik:
        conditions.append(Establishment.eik == eik.strip())
    if establishment_type:
        conditions.append(Establishment.establishment_type == establishment_type.value)
    return await _page(
        session, Establishment, EstablishmentRead, conditions, getattr(Establishment, sort), order, limit, offset
    )


@router.get(
    "/establishments/{establishment_id}",
    response_model=EstablishmentDetail,
    summary="Get Establishment",
    description="Retrieve an establishment together with its personnel.",
    response_description="The establishment and its personnel.",
    responses={404: {"description": "Establishment not found"}},
)
async def get_establishment(establishment_id: int, _admin: AdminUser, session: SessionDep) -> EstablishmentDetail:
    """Get an establishment with its personnel."""
    establishment = await EstablishmentRepository(session).get_by_id(establishment_id)
    if establishment is None:
        raise not_found("ESTABLISHMENT_NOT_FOUND", "Establishment not found")
    people = await PersonnelRepository(session).list(filters={"establishment_id": establishment_id})
    return EstablishmentDetail(
        establishment=EstablishmentRead.model_validate(establishment),
        personnel=[PersonnelRead.model_validate(p) for p in people],
    )


@router.delete(
    "/establishments/{establishment_id}",
    response_model=DeletedResponse,
    summary="Delete Establishment",
    description="Delete an establishment together with its personnel.",
    response_description="Deletion acknowledgement.",
    responses={404: {"description": "Establishment not found"}},
)
async def delete_establishment(establishment_id: int, admin: AdminUser, session: SessionDep) -> DeletedResponse:
    """Delete an establishment."""
    repo = EstablishmentRepository(session)
    establishment = await repo.get_by_id(establishment_id)
    if establishment is None:
        raise not_found("ESTABLISHMENT_NOT_FOUND", "Establishment not found")
    await repo.delete_with_personnel(establishment)
    logger.info(f"Admin {admin.id} deleted establishment {establishment_id}")
    return DeletedResponse(message="Establishment deleted successfully", id=establishment_id)


# Diary devices and readings


@router.get(
    "/diary-devices",
    response_model=Page[DiaryDeviceRead],
    summary="List Devices",
    description="Retrieve diary devices of all users.",
    response_description="A page of devices.",
)
async def list_devices(
    _admin: AdminUser,
    session: SessionDep,
    user_id: Optional[int] = Query(default=None),
    device_type: Optional[DeviceType] = Query(default=None),
    sort: Literal["id", "device_name", "device_type", "user_id", "created_at"] = Query(default="created_at"),
    order: Order = Query(default="desc"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> Page[DiaryDeviceRead]:
    """List devices."""
    conditions = []
    if user_id is not None:
        conditions.append(DiaryDevice.user_id == user_id)
    if device_type is not None:
        conditions.append(DiaryDevice.device_type == device_type.value)
    return await _page(
        session, DiaryDevice, DiaryDeviceRead, conditions, getattr(DiaryDevice, sort), order, limit, offset
    )


@router.get(
    "/diary-devices/{device_id}",
    response_model=DiaryDeviceRead,
    summary="Get Device",
    description="Retrieve any diary device.",
    response_description="The device object.",
    responses={404: {"description": "Device not found"}},
)
async def get_device(device_id: int, _admin: AdminUser, session: SessionDep) -> DiaryDeviceRead:
    """Get a device."""
    device = await DiaryDeviceRepository(session).get_by_id(device_id)
    if device is None:
        raise not_found("DEVICE_NOT_FOUND", "Device not found")
    return DiaryDeviceRead.model_validate(device)


@router.delete(
    "/diary-devices/{device_id}",
    response_model=DeletedResponse,
    summary="Delete Device",
    description="Delete any diary device together with its readings.",
    response_description="Deletion acknowledgement.",
    responses={404: {"description": "Device not found"}},
)
async def delete_device(device_id: int, admin: AdminUser, session: SessionDep) -> DeletedResponse:
    """Delete a device and its readings."""
    repo = DiaryDeviceRepository(session)
    device = await repo.get_by_id(device_id)
    if device is None:
        raise not_found("DEVICE_NOT_FOUND", "Device not found")
    await repo.delete_with_readings(device)
    logger.info(f"Admin {admin.id} deleted device {device_id}")
    return DeletedResponse(message="Device deleted successfully", id=device_id)


@router.get(
    "/temperature-readings",
    response_model=Page[TemperatureReadingRead],
    summary="List Readings",
    description="Retrieve temperature readings of all devices.",
    response_description="A page of readings.",
)
async def list_readings(
    _admin: AdminUser,
    session: SessionDep,
    device_id: Optional[int] = Query(default=None),
    start_date: Optional[dt.date] = Query(default=None),
    end_date: Optional[dt.date] = Query(default=None),
    sort: Literal["id", "device_id", "reading_date", "hour", "temperature", "created_at"] = Query(
        default="reading_date"
    ),
    order: Order = Query(default="desc"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> Page[TemperatureReadingRead]:
    """List readings."""
    conditions = []
    if device_id is not None:
        conditions.append(TemperatureReading.device_id == device_id)
    if start_date is not None:
        conditions.append(TemperatureReading.reading_date >= start_date)
    if end_date is not None:
        conditions.append(TemperatureReading.reading_date <= end_date)
    return await _page(
        session,
        TemperatureReading,
        TemperatureReadingRead,
        conditions,
        getattr(TemperatureReading, sort),
        order,
        limit,
        offset,
    )


# Records


@router.get(
    "/incoming-controls",
    response_model=Page[IncomingControlRead],
    summary="List Incoming Controls",
    description="Retrieve incoming controls of all users, newest control date first.",
    response_description="A page of controls.",
)
async def list_incoming_controls(
    _admin: AdminUser,
    session: SessionDep,
    date: Optional[dt.date] = Query(default=None, description="Only controls of this day"),
    user_id: Optional[int] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> Page[IncomingControlRead]:
    """List incoming controls."""
    conditions = []
    if date is not None:
        conditions.append(IncomingControl.control_date == date)
    if user_id is not None:
        conditions.append(IncomingControl.user_id == user_id)
    return await _page(
        session, IncomingControl, IncomingControlRead, conditions, IncomingControl.control_date, "desc", limit, offset
    )


@router.get(
    "/health-books-expiring",
    response_model=list[ExpiringHealthBook],
    summary="Expiring Health Books",
    description="Personnel whose health book expires within the warning window, soonest first.",
    response_description="Employees with the days left and the establishment contact.",
)
async def expiring_health_books(_admin: AdminUser, session: SessionDep) -> list[ExpiringHealthBook]:
    """
    List expiring health books.

    The window starts today and spans ``HEALTH_BOOK_WARNING_DAYS`` days
    (10 by default), both ends included.
    """
    current = today()
    pairs = await PersonnelRepository(session).expiring_between(current, settings.health_book_warning_days)
    return [
        ExpiringHealthBook(
            **PersonnelRead.model_validate(person).model_dump(),
            days_until_expiry=(person.health_book_validity - current).days,
            company_name=establishment.company_name,
            contact_email=establishment.contact_email,
        )
        for person, establishment in pairs
    ]
