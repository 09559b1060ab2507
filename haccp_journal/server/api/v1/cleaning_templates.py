"""
API endpoints for cleaning templates.

A template is the recurring cleaning plan of the caller: on which weekdays
and at which hours an area is cleaned, with which products and by whom.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status
from sqlmodel import select

from haccp_journal.core.database.entities.cleaning import CleaningTemplate
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.io.common import DeletedResponse, changes_of
from haccp_journal.core.models.io.records import CleaningTemplateCreate, CleaningTemplateRead, CleaningTemplateUpdate
from haccp_journal.server.services.deps import CurrentUser, SessionDep
from haccp_journal.server.services.ownership import check_optional_establishment, get_owned, get_owned_personnel

router = APIRouter(tags=["cleaning-templates"])
logger = get_logger(__name__)

_NOT_FOUND_OR_FORBIDDEN = {
    403: {"description": "Template belongs to another user"},
    404: {"description": "Template not found"},
}


@router.get(
    "",
    response_model=list[CleaningTemplateRead],
    summary="List Own Templates",
    description="Retrieve the caller's cleaning templates, newest first.",
    response_description="A list of templates.",
)
async def list_templates(
    current_user: CurrentUser,
    session: SessionDep,
    establishment_id: Optional[int] = Query(default=None, description="Only templates of this establishment"),
) -> list[CleaningTemplateRead]:
    """List the caller's cleaning templates."""
    statement = select(CleaningTemplate).where(CleaningTemplate.user_id == current_user.id)
    if establishment_id is not None:
        statement = statement.where(CleaningTemplate.establishment_id == establishment_id)
    statement = statement.order_by(CleaningTemplate.created_at.desc(), CleaningTemplate.id.desc())  # type: ignore[attr-defined]
    result = await session.execute(statement)
    return [CleaningTemplateRead.model_validate(t) for t in result.scalars().all()]


@router.post(
    "",
    response_model=CleaningTemplateRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Template",
    description="Create a recurring cleaning plan.",
    response_description="The created template.",
    responses={
        201: {"description": "Template created"},
        400: {"description": "Invalid data"},
        403: {"description": "Establishment or employee belongs to another user"},
        404: {"description": "Establishment or employee not found"},
    },
)
async def create_template(
    payload: CleaningTemplateCreate,
    current_user: CurrentUser,
    session: SessionDep,
) -> CleaningTemplateRead:
    """
    Create a cleaning template.

    - **days_of_week**: Non-empty list of weekday names (monday..sunday).
    - **cleaning_hours**: Non-empty list of ``HH:MM`` times.
    - **duration**: Minutes per cleaning, greater than zero.
    - **products**, **cleaning_areas**: Non-empty lists.
    - **employee_id**: Optional responsible employee of the caller.
    """
    await check_optional_establishment(session, payload.establishment_id, current_user)
    if payload.employee_id is not None:
        await get_owned_personnel(session, payload.employee_id, current_user)

    template = CleaningTemplate(user_id=current_user.id, **payload.model_dump())
    session.add(template)
    await session.commit()
    await session.refresh(template)
    logger.info(f"Created cleaning template {template.id}")
    return CleaningTemplateRead.model_validate(template)


@router.get(
    "/{template_id}",
    response_model=CleaningTemplateRead,
    summary="Get Template",
    description="Retrieve a cleaning template of the caller.",
    response_description="The template object.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def get_template(template_id: int, current_user: CurrentUser, session: SessionDep) -> CleaningTemplateRead:
    """Get cleaning template by ID."""
    template = await get_owned(session, CleaningTemplate, template_id, current_user, "template")
    return CleaningTemplateRead.model_validate(template)


@router.put(
    "/{template_id}",
    response_model=CleaningTemplateRead,
    summary="Update Template",
    description="Partially update a cleaning template.",
    response_description="The updated template.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def update_template(
    template_id: int,
    payload: CleaningTemplateUpdate,
    current_user: CurrentUser,
    session: SessionDep,
) -> CleaningTemplateRead:
    """Update a cleaning template."""
    template = await get_owned(session, CleaningTemplate, template_id, current_user, "template")
    changes = changes_of(payload, nullable=frozenset({"establishment_id", "employee_id"}))
    await check_optional_establishment(session, changes.get("establishment_id"), current_user)
    if changes.get("employee_id") is not None:
        await get_owned_personnel(session, changes["employee_id"], current_user)

    for key, value in changes.items():
        setattr(template, key, value)
    session.add(template)
    await session.commit()
    await session.refresh(template)
    return CleaningTemplateRead.model_validate(template)


@router.delete(
    "/{template_id}",
    response_model=DeletedResponse,
    summary="Delete Template",
    description="Delete a cleaning template of the caller.",
    response_description="Deletion acknowledgement.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def delete_template(template_id: int, current_user: CurrentUser, session: SessionDep) -> DeletedResponse:
    """Delete a cleaning template."""
    template = await get_owned(session, CleaningTemplate, template_id, current_user, "template")
    await session.delete(template)
    await session.commit()
    return DeletedResponse(message="Cleaning template deleted successfully", id=template_id)
