"""
API endpoints for cleaning logs.

A log records one cleaning that took place: the day, the ``HH:MM`` start and
end (end strictly after start), the areas and products, and who did it.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Query, status
from sqlmodel import select

from haccp_journal.core.database.entities.cleaning import CleaningLog
from haccp_journal.core.errors import bad_request
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.io.common import DeletedResponse, changes_of, minutes_of
from haccp_journal.core.models.io.records import CleaningLogCreate, CleaningLogRead, CleaningLogUpdate
from haccp_journal.server.services.deps import AuthUser, CurrentUser, SessionDep
from haccp_journal.server.services.ownership import check_optional_establishment, get_owned, get_owned_personnel

router = APIRouter(tags=["cleaning-logs"])
logger = get_logger(__name__)

_NOT_FOUND_OR_FORBIDDEN = {
    403: {"description": "Log belongs to another user"},
    404: {"description": "Log not found"},
}


async def _employee_name(session, employee_id: Optional[int], user: AuthUser) -> Optional[str]:
    if employee_id is None:
        return None
    person = await get_owned_personnel(session, employee_id, user)
    return person.full_name


@router.get(
    "",
    response_model=list[CleaningLogRead],
    summary="List Own Cleaning Logs",
    description="Retrieve the caller's cleaning logs, newest day first.",
    response_description="A list of cleaning logs.",
)
async def list_logs(
    current_user: CurrentUser,
    session: SessionDep,
    establishment_id: Optional[int] = Query(default=None, description="Only logs of this establishment"),
    start_date: Optional[dt.date] = Query(default=None, description="First day (inclusive)"),
    end_date: Optional[dt.date] = Query(default=None, description="Last day (inclusive)"),
) -> list[CleaningLogRead]:
    """List the caller's cleaning logs."""
    statement = select(CleaningLog).where(CleaningLog.user_id == current_user.id)
    if establishment_id is not None:
        statement = statement.where(CleaningLog.establishment_id == establishment_id)
    if start_date is not None:
        statement = statement.where(CleaningLog.log_date >= start_date)
    if end_date is not None:
        statement = statement.where(CleaningLog.log_date <= end_date)
    statement = statement.order_by(CleaningLog.log_date.desc(), CleaningLog.start_time)  # type: ignore[attr-defined]
    result = await session.execute(statement)
    return [CleaningLogRead.model_validate(entry) for entry in result.scalars().all()]


@router.post(
    "",
    response_model=CleaningLogRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Cleaning",
    description="Record a cleaning that took place.",
    response_description="The created cleaning log.",
    responses={
        201: {"description": "Cleaning log created"},
        400: {"description": "Invalid data or end time not after start time"},
        403: {"description": "Establishment or employee belongs to another user"},
        404: {"description": "Establishment or employee not found"},
    },
)
async def create_log(payload: CleaningLogCreate, current_user: CurrentUser, session: SessionDep) -> CleaningLogRead:
    """
    Record a cleaning.

    - **log_date**: Day of the cleaning.
    - **start_time**, **end_time**: ``HH:MM``; the end must be after the start.
    - **cleaning_areas**, **products**: Non-empty lists.
    - **employee_id**: Optional employee; their name is copied into
      ``employee_name`` unless one is given.
    """
    await check_optional_establishment(session, payload.establishment_id, current_user)
    data = payload.model_dump()
    name = await _employee_name(session, payload.employee_id, current_user)
    data["employee_name"] = data.get("employee_name") or name

    entry = CleaningLog(user_id=current_user.id, **data)
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    logger.info(f"Recorded cleaning log {entry.id}")
    return CleaningLogRead.model_validate(entry)


@router.get(
    "/{log_id}",
    response_model=CleaningLogRead,
    summary="Get Cleaning Log",
    description="Retrieve a cleaning log of the caller.",
    response_description="The cleaning log.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def get_log(log_id: int, current_user: CurrentUser, session: SessionDep) -> CleaningLogRead:
    """Get cleaning log by ID."""
    entry = await get_owned(session, CleaningLog, log_id, current_user, "cleaning log")
    return CleaningLogRead.model_validate(entry)


@router.put(
    "/{log_id}",
    response_model=CleaningLogRead,
    summary="Update Cleaning Log",
    description="Partially update a cleaning log; the time range is checked against the stored values.",
    response_description="The updated cleaning log.",
    responses={400: {"description": "Invalid data or end time not after start time"}, **_NOT_FOUND_OR_FORBIDDEN},
)
async def update_log(
    log_id: int,
    payload: CleaningLogUpdate,
    current_user: CurrentUser,
    session: SessionDep,
) -> CleaningLogRead:
    """Update a cleaning log."""
    entry = await get_owned(session, CleaningLog, log_id, current_user, "cleaning log")
    changes = changes_of(payload, nullable=frozenset({"establishment_id", "employee_id", "employee_name", "notes"}))

    start_time = changes.get("start_time", entry.start_time)
    end_time = changes.get("end_time", entry.end_time)
    if minutes_of(end_time) <= minutes_of(start_time):
        raise bad_request("INVALID_TIME_RANGE", "End time must be after start time")

    await check_optional_establishment(session, changes.get("establishment_id"), current_user)
    if changes.get("employee_id") is not None:
        name = await _employee_name(session, changes["employee_id"], current_user)
        changes["employee_name"] = changes.get("employee_name") or name

    for key, value in changes.items():
        setattr(entry, key, value)
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    return CleaningLogRead.model_validate(entry)


@router.delete(
    "/{log_id}",
    response_model=DeletedResponse,
    summary="Delete Cleaning Log",
    description="Delete a cleaning log of the caller.",
    response_description="Deletion acknowledgement.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def delete_log(log_id: int, current_user: CurrentUser, session: SessionDep) -> DeletedResponse:
    """Delete a cleaning log."""
    entry = await get_owned(session, CleaningLog, log_id, current_user, "cleaning log")
    await session.delete(entry)
    await session.commit()
    return DeletedResponse(message="Cleaning log deleted successfully", id=log_id)
