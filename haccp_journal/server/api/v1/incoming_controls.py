"""
API endpoints for incoming goods controls.

A control is a dated photo of delivered goods, optionally attached to an
establishment of the caller. Image URLs are stored as given.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status
from sqlmodel import select

from haccp_journal.core.database.entities.incoming_controls import IncomingControl
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.io.common import DeletedResponse, changes_of
from haccp_journal.core.models.io.records import IncomingControlCreate, IncomingControlRead, IncomingControlUpdate
from haccp_journal.server.services.deps import CurrentUser, SessionDep
from haccp_journal.server.services.ownership import check_optional_establishment, get_owned

router = APIRouter(tags=["incoming-controls"])
logger = get_logger(__name__)

_NOT_FOUND_OR_FORBIDDEN = {
    403: {"description": "Control belongs to another user"},
    404: {"description": "Control not found"},
}


@router.get(
    "",
    response_model=list[IncomingControlRead],
    summary="List Own Controls",
    description="Retrieve the caller's incoming controls, newest control date first.",
    response_description="A list of controls.",
)
async def list_controls(
    current_user: CurrentUser,
    session: SessionDep,
    establishment_id: Optional[int] = Query(default=None, description="Only controls of this establishment"),
) -> list[IncomingControlRead]:
    """List the caller's incoming controls."""
    statement = select(IncomingControl).where(IncomingControl.user_id == current_user.id)
    if establishment_id is not None:
        statement = statement.where(IncomingControl.establishment_id == establishment_id)
    statement = statement.order_by(IncomingControl.control_date.desc(), IncomingControl.id.desc())  # type: ignore[attr-defined]
    result = await session.execute(statement)
    return [IncomingControlRead.model_validate(c) for c in result.scalars().all()]


@router.post(
    "",
    response_model=IncomingControlRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Control",
    description="Record an incoming goods control.",
    response_description="The created control.",
    responses={
        201: {"description": "Control created"},
        400: {"description": "Invalid data"},
        403: {"description": "Establishment belongs to another user"},
        404: {"description": "Establishment not found"},
    },
)
async def create_control(
    payload: IncomingControlCreate,
    current_user: CurrentUser,
    session: SessionDep,
) -> IncomingControlRead:
    """
    Record an incoming control.

    - **control_date**: Day of the delivery (YYYY-MM-DD).
    - **image_url**: Photo of the delivery note or goods.
    - **establishment_id**: Optional establishment of the caller.
    """
    await check_optional_establishment(session, payload.establishment_id, current_user)
    control = IncomingControl(user_id=current_user.id, **payload.model_dump())
    session.add(control)
    await session.commit()
    await session.refresh(control)
    logger.info(f"Recorded incoming control {control.id}")
    return IncomingControlRead.model_validate(control)


@router.get(
    "/{control_id}",
    response_model=IncomingControlRead,
    summary="Get Control",
    description="Retrieve an incoming control of the caller.",
    response_description="The control object.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def get_control(control_id: int, current_user: CurrentUser, session: SessionDep) -> IncomingControlRead:
    """Get incoming control by ID."""
    control = await get_owned(session, IncomingControl, control_id, current_user, "incoming control")
    return IncomingControlRead.model_validate(control)


@router.put(
    "/{control_id}",
    response_model=IncomingControlRead,
    summary="Update Control",
    description="Partially update an incoming control.",
    response_description="The updated control.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def update_control(
    control_id: int,
    payload: IncomingControlUpdate,
    current_user: CurrentUser,
    session: SessionDep,
) -> IncomingControlRead:
    """Update an incoming control."""
    control = await get_owned(session, IncomingControl, control_id, current_user, "incoming control")
    changes = changes_of(payload, nullable=frozenset({"establishment_id", "notes"}))
    await check_optional_establishment(session, changes.get("establishment_id"), current_user)
    for key, value in changes.items():
        setattr(control, key, value)
    session.add(control)
    await session.commit()
    await session.refresh(control)
    return IncomingControlRead.model_validate(control)


@router.delete(
    "/{control_id}",
    response_model=DeletedResponse,
    summary="Delete Control",
    description="Delete an incoming control of the caller.",
    response_description="Deletion acknowledgement.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def delete_control(control_id: int, current_user: CurrentUser, session: SessionDep) -> DeletedResponse:
    """Delete an incoming control."""
    control = await get_owned(session, IncomingControl, control_id, current_user, "incoming control")
    await session.delete(control)
    await session.commit()
    return DeletedResponse(message="Incoming control deleted successfully", id=control_id)
