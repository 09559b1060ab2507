"""
API endpoints for temperature diary devices.

Registering a device derives its allowed range from the device type and
backfills the last fifteen days of readings in the same transaction.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status

from haccp_journal.core.database.entities.diary import DiaryDevice
from haccp_journal.core.database.repositories import DiaryDeviceRepository
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.domain.enums import DeviceType
from haccp_journal.core.models.io.common import DeletedResponse
from haccp_journal.core.models.io.diary import (
    DiaryDeviceCreate,
    DiaryDeviceCreated,
    DiaryDeviceRead,
    DiaryDeviceUpdate,
)
from haccp_journal.core.readings import DEVICE_RANGES
from haccp_journal.server.services.deps import CurrentUser, SessionDep
from haccp_journal.server.services.generation import backfill_device
from haccp_journal.server.services.ownership import get_owned, get_owned_establishment

router = APIRouter(tags=["diary-devices"])
logger = get_logger(__name__)

_NOT_FOUND_OR_FORBIDDEN = {
    403: {"description": "Device belongs to another user"},
    404: {"description": "Device not found"},
}


@router.get(
    "",
    response_model=list[DiaryDeviceRead],
    summary="List Own Devices",
    description="Retrieve the caller's diary devices, optionally of one establishment.",
    response_description="A list of devices, newest first.",
)
async def list_devices(
    current_user: CurrentUser,
    session: SessionDep,
    establishment_id: Optional[int] = Query(default=None, description="Only devices of this establishment"),
) -> list[DiaryDeviceRead]:
    """List the caller's devices."""
    devices = await DiaryDeviceRepository(session).list(
        filters={"user_id": current_user.id, "establishment_id": establishment_id}
    )
    return [DiaryDeviceRead.model_validate(d) for d in devices]


@router.post(
    "",
    response_model=DiaryDeviceCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Register Device",
    description="Register a device and backfill 15 days of readings at 10:00 and 17:00.",
    response_description="The created device and the number of backfilled readings.",
    responses={
        201: {"description": "Device created"},
        400: {"description": "Invalid data"},
        403: {"description": "Establishment belongs to another user"},
        404: {"description": "Establishment not found"},
    },
)
async def create_device(
    payload: DiaryDeviceCreate,
    current_user: CurrentUser,
    session: SessionDep,
) -> DiaryDeviceCreated:
    """
    Register a diary device.

    - **establishment_id**: Establishment owned by the caller.
    - **device_type**: One of the diary device types; determines the temperature range.
    - **device_name**: Display name.
    """
    await get_owned_establishment(session, payload.establishment_id, current_user)
    min_temp, max_temp = DEVICE_RANGES[DeviceType(payload.device_type)]
    device = DiaryDevice(
        user_id=current_user.id,
        establishment_id=payload.establishment_id,
        device_type=payload.device_type,
        device_name=payload.device_name,
        min_temp=min_temp,
        max_temp=max_temp,
    )
    session.add(device)
    try:
        await session.flush()
        generated = await backfill_device(session, device)
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    await session.refresh(device)

    logger.info(f"Registered device {device.id} with {generated} backfilled readings")
    return DiaryDeviceCreated(
        **DiaryDeviceRead.model_validate(device).model_dump(),
        readings_generated=generated,
    )


@router.get(
    "/{device_id}",
    response_model=DiaryDeviceRead,
    summary="Get Device",
    description="Retrieve a device of the caller.",
    response_description="The device object.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def get_device(device_id: int, current_user: CurrentUser, session: SessionDep) -> DiaryDeviceRead:
    """Get device by ID."""
    device = await get_owned(session, DiaryDevice, device_id, current_user, "device")
    return DiaryDeviceRead.model_validate(device)


@router.put(
    "/{device_id}",
    response_model=DiaryDeviceRead,
    summary="Rename Device",
    description="Change the name of a device; type and range are fixed.",
    response_description="The updated device.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def update_device(
    device_id: int,
    payload: DiaryDeviceUpdate,
    current_user: CurrentUser,
    session: SessionDep,
) -> DiaryDeviceRead:
    """Rename a device."""
    device = await get_owned(session, DiaryDevice, device_id, current_user, "device")
    device = await DiaryDeviceRepository(session).update(device, {"device_name": payload.device_name})
    return DiaryDeviceRead.model_validate(device)


@router.delete(
    "/{device_id}",
    response_model=DeletedResponse,
    summary="Delete Device",
    description="Delete a device together with all of its readings.",
    response_description="Deletion acknowledgement.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def delete_device(device_id: int, current_user: CurrentUser, session: SessionDep) -> DeletedResponse:
    """Delete a device and its readings."""
    device = await get_owned(session, DiaryDevice, device_id, current_user, "device")
    await DiaryDeviceRepository(session).delete_with_readings(device)
    logger.info(f"Deleted device {device_id}")
    return DeletedResponse(message="Device deleted successfully", id=device_id)
