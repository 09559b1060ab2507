"""
API endpoints for diary temperature readings.
"""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Query, status

from haccp_journal.core.database.entities.diary import DiaryDevice
from haccp_journal.core.database.repositories import TemperatureReadingRepository
from haccp_journal.core.errors import bad_request, forbidden, not_found
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.io.diary import (
    GenerateReadingsRequest,
    GenerateReadingsResponse,
    ReadingNotesUpdate,
    TemperatureReadingRead,
)
from haccp_journal.core.monitoring import log_generation
from haccp_journal.server.services.deps import CurrentUser, SessionDep
from haccp_journal.server.services.generation import stage_device_readings
from haccp_journal.server.services.ownership import get_owned

router = APIRouter(tags=["temperature-readings"])
logger = get_logger(__name__)


@router.get(
    "/by-device/{device_id}",
    response_model=list[TemperatureReadingRead],
    summary="Readings Of A Day",
    description="Retrieve the readings of a device for one day, ordered by hour.",
    response_description="A list of readings.",
    responses={
        400: {"description": "Missing or malformed date"},
        403: {"description": "Device belongs to another user"},
        404: {"description": "Device not found"},
    },
)
async def list_device_readings(
    device_id: int,
    current_user: CurrentUser,
    session: SessionDep,
    date: dt.date = Query(description="Day in YYYY-MM-DD format"),
) -> list[TemperatureReadingRead]:
    """
    List readings of a device.

    - **device_id**: Device owned by the caller.
    - **date**: Day to read.
    """
    await get_owned(session, DiaryDevice, device_id, current_user, "device")
    readings = await TemperatureReadingRepository(session).list(filters={"device_id": device_id, "reading_date": date})
    return [TemperatureReadingRead.model_validate(r) for r in readings]


@router.put(
    "/{reading_id}/notes",
    response_model=TemperatureReadingRead,
    summary="Update Reading Notes",
    description="Set or clear the notes of a reading.",
    response_description="The updated reading.",
    responses={
        403: {"description": "Reading belongs to another user's device"},
        404: {"description": "Reading not found"},
    },
)
async def update_reading_notes(
    reading_id: int,
    payload: ReadingNotesUpdate,
    current_user: CurrentUser,
    session: SessionDep,
) -> TemperatureReadingRead:
    """Update the notes of a reading; ``null`` clears them."""
    repo = TemperatureReadingRepository(session)
    reading = await repo.get_by_id(reading_id)
    if reading is None:
        raise not_found("READING_NOT_FOUND", "Temperature reading not found")
    device = await session.get(DiaryDevice, reading.device_id)
    if device is None or device.user_id != current_user.id:
        raise forbidden("Access denied: Device does not belong to user")

    reading = await repo.update(reading, {"notes": payload.notes})
    return TemperatureReadingRead.model_validate(reading)


@router.post(
    "/generate",
    response_model=GenerateReadingsResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate Readings",
    description="Fill the empty 10:00 and 17:00 slots of a device for one day.",
    response_description="Number of generated readings.",
    responses={
        201: {"description": "Readings generated"},
        400: {"description": "Invalid data or the day is already complete"},
        403: {"description": "Device belongs to another user"},
        404: {"description": "Device not found"},
    },
)
async def generate_readings(
    payload: GenerateReadingsRequest,
    current_user: CurrentUser,
    session: SessionDep,
) -> GenerateReadingsResponse:
    """
    Generate readings for a device and day.

    Existing readings are kept; a day that already holds every slot is
    rejected with ``READINGS_ALREADY_EXIST``.

    - **device_id**: Device owned by the caller.
    - **date**: Day to fill.
    """
    device = await get_owned(session, DiaryDevice, payload.device_id, current_user, "device")
    generated = await stage_device_readings(session, device, [payload.date])
    if not generated:
        raise bad_request("READINGS_ALREADY_EXIST", "Readings already exist for this device and date")
    await session.commit()

    log_generation("device_readings", generated, {"device_id": device.id, "date": payload.date.isoformat()})
    return GenerateReadingsResponse(
        message="Temperature readings generated successfully",
        device_id=device.id,
        date=payload.date,
        readings_generated=generated,
    )
