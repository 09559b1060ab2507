"""
API endpoints for establishment personnel.

Employees belong to an establishment; access is granted to the owner of that
establishment.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from haccp_journal.core.database.entities.establishments import Personnel
from haccp_journal.core.database.repositories import PersonnelRepository
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.io.common import DeletedResponse, changes_of
from haccp_journal.core.models.io.establishments import PersonnelCreate, PersonnelRead, PersonnelUpdate
from haccp_journal.server.services.deps import CurrentUser, SessionDep
from haccp_journal.server.services.ownership import get_owned_establishment, get_owned_personnel

router = APIRouter(tags=["personnel"])
logger = get_logger(__name__)

_NOT_FOUND_OR_FORBIDDEN = {
    403: {"description": "Establishment belongs to another user"},
    404: {"description": "Employee or establishment not found"},
}


@router.get(
    "",
    response_model=list[PersonnelRead],
    summary="List Own Personnel",
    description="Retrieve the employees of all establishments owned by the caller.",
    response_description="A list of employees ordered by name.",
)
async def list_personnel(current_user: CurrentUser, session: SessionDep) -> list[PersonnelRead]:
    """List the caller's personnel."""
    people = await PersonnelRepository(session).list(filters={"user_id": current_user.id})
    return [PersonnelRead.model_validate(p) for p in people]


@router.get(
    "/by-establishment/{establishment_id}",
    response_model=list[PersonnelRead],
    summary="List Establishment Personnel",
    description="Retrieve the employees of one establishment.",
    response_description="A list of employees ordered by name.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def list_establishment_personnel(
    establishment_id: int,
    current_user: CurrentUser,
    session: SessionDep,
) -> list[PersonnelRead]:
    """List personnel of an establishment owned by the caller."""
    await get_owned_establishment(session, establishment_id, current_user)
    people = await PersonnelRepository(session).list(filters={"establishment_id": establishment_id})
    return [PersonnelRead.model_validate(p) for p in people]


@router.post(
    "",
    response_model=PersonnelRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Employee",
    description="Add an employee to an establishment of the caller.",
    response_description="The created employee.",
    responses={
        201: {"description": "Employee created"},
        400: {"description": "Invalid data"},
        **_NOT_FOUND_OR_FORBIDDEN,
    },
)
async def create_personnel(payload: PersonnelCreate, current_user: CurrentUser, session: SessionDep) -> PersonnelRead:
    """
    Add an employee.

    - **establishment_id**: Establishment owned by the caller.
    - **egn**: Personal identification number, stored as given.
    - **health_book_validity**: Last day the health book is valid (YYYY-MM-DD).
    """
    await get_owned_establishment(session, payload.establishment_id, current_user)
    person = await PersonnelRepository(session).create(Personnel(**payload.model_dump()))
    logger.info(f"Added employee {person.id} to establishment {person.establishment_id}")
    return PersonnelRead.model_validate(person)


@router.get(
    "/{personnel_id}",
    response_model=PersonnelRead,
    summary="Get Employee",
    description="Retrieve an employee of the caller.",
    response_description="The employee object.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def get_personnel(personnel_id: int, current_user: CurrentUser, session: SessionDep) -> PersonnelRead:
    """Get employee by ID."""
    person = await get_owned_personnel(session, personnel_id, current_user)
    return PersonnelRead.model_validate(person)


@router.put(
    "/{personnel_id}",
    response_model=PersonnelRead,
    summary="Update Employee",
    description="Partially update an employee of the caller.",
    response_description="The updated employee.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def update_personnel(
    personnel_id: int,
    payload: PersonnelUpdate,
    current_user: CurrentUser,
    session: SessionDep,
) -> PersonnelRead:
    """Update an employee."""
    person = await get_owned_personnel(session, personnel_id, current_user)
    changes = changes_of(payload, nullable=frozenset({"health_book_image_url", "photo_url"}))
    person = await PersonnelRepository(session).update(person, changes)
    return PersonnelRead.model_validate(person)


@router.delete(
    "/{personnel_id}",
    response_model=DeletedResponse,
    summary="Delete Employee",
    description="Remove an employee of the caller.",
    response_description="Deletion acknowledgement.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def delete_personnel(personnel_id: int, current_user: CurrentUser, session: SessionDep) -> DeletedResponse:
    """Delete an employee."""
    person = await get_owned_personnel(session, personnel_id, current_user)
    await PersonnelRepository(session).delete_person(person)
    logger.info(f"Deleted employee {personnel_id}")
    return DeletedResponse(message="Personnel deleted successfully", id=personnel_id)
