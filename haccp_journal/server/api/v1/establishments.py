"""
API endpoints for establishments.

Owners register their food-service establishments here. The EIK of every
establishment is checked with the Bulgarian checksum rules and the result is
recorded in ``eik_verified``; the same check is offered standalone through
``/validate-eik``.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from haccp_journal.core.database.base import utc_now
from haccp_journal.core.database.entities.establishments import Establishment
from haccp_journal.core.database.repositories import EstablishmentRepository
from haccp_journal.core.eik import EikFormatError, check_eik, is_valid_eik
from haccp_journal.core.errors import bad_request
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.io.common import DeletedResponse, changes_of
from haccp_journal.core.models.io.establishments import (
    EikValidationRequest,
    EikValidationResponse,
    EstablishmentCreate,
    EstablishmentRead,
    EstablishmentUpdate,
)
from haccp_journal.server.core.config import settings
from haccp_journal.server.services.deps import CurrentUser, SessionDep
from haccp_journal.server.services.ownership import get_owned

router = APIRouter(tags=["establishments"])
logger = get_logger(__name__)


def _apply_eik(establishment: Establishment, eik: str) -> None:
    establishment.eik = eik.strip()
    establishment.eik_verified = is_valid_eik(establishment.eik)
    establishment.eik_verification_date = utc_now() if establishment.eik_verified else None


@router.post(
    "/validate-eik",
    response_model=EikValidationResponse,
    summary="Validate EIK",
    description="Check the format and checksum of a Bulgarian company identifier (EIK).",
    response_description="Whether the checksum matches.",
    responses={
        200: {"description": "Checksum evaluated"},
        400: {"description": "Missing EIK, non-digit characters or wrong length"},
    },
)
async def validate_eik(payload: EikValidationRequest) -> EikValidationResponse:
    """
    Validate an EIK.

    A well-formed EIK with a wrong checksum is not an error: the response
    reports ``valid: false``.

    - **eik**: 9 or 13 digits; surrounding whitespace is ignored.
    """
    if not payload.eik or not payload.eik.strip():
        raise bad_request("MISSING_EIK", "EIK is required")
    try:
        valid = check_eik(payload.eik)
    except EikFormatError as e:
        raise bad_request(e.reason, e.message) from e

    if not valid:
        return EikValidationResponse(valid=False, message="Invalid EIK checksum")
    return EikValidationResponse(valid=True, message="EIK is valid", company_name=None)


@router.get(
    "",
    response_model=list[EstablishmentRead],
    summary="List Own Establishments",
    description="Retrieve the establishments registered by the caller, newest first.",
    response_description="A list of establishment objects.",
)
async def list_establishments(current_user: CurrentUser, session: SessionDep) -> list[EstablishmentRead]:
    """List the caller's establishments."""
    establishments = await EstablishmentRepository(session).list(filters={"user_id": current_user.id})
    return [EstablishmentRead.model_validate(e) for e in establishments]


@router.post(
    "",
    response_model=EstablishmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Establishment",
    description="Register an establishment; the EIK checksum result is stored with it.",
    response_description="The created establishment.",
    responses={
        201: {"description": "Establishment created"},
        400: {"description": "Invalid data or establishment limit reached"},
    },
)
async def create_establishment(
    payload: EstablishmentCreate,
    current_user: CurrentUser,
    session: SessionDep,
) -> EstablishmentRead:
    """
    Create an establishment.

    - **establishment_type**: One of the registered establishment categories.
    - **employee_count**: Positive number of employees.
    - **manager_email**, **contact_email**: Valid emails, stored lower-cased.
    - **eik**: Company identifier; an invalid checksum is stored as unverified.
    """
    repo = EstablishmentRepository(session)
    limit = settings.max_establishments_per_user
    if await repo.count_for_user(current_user.id) >= limit:
        raise bad_request("MAX_ESTABLISHMENTS_REACHED", f"Maximum of {limit} establishments per user reached")

    establishment = Establishment(user_id=current_user.id, **payload.model_dump(exclude={"eik"}))
    _apply_eik(establishment, payload.eik)
    establishment = await repo.create(establishment)
    logger.info(
        f"Created establishment {establishment.id} for user {current_user.id}",
        extra={"eik_verified": establishment.eik_verified},
    )
    return EstablishmentRead.model_validate(establishment)


@router.get(
    "/{establishment_id}",
    response_model=EstablishmentRead,
    summary="Get Establishment",
    description="Retrieve an establishment of the caller.",
    response_description="The establishment object.",
    responses={
        200: {"description": "Establishment found"},
        403: {"description": "Establishment belongs to another user"},
        404: {"description": "Establishment not found"},
    },
)
async def get_establishment(establishment_id: int, current_user: CurrentUser, session: SessionDep) -> EstablishmentRead:
    """Get establishment by ID."""
    establishment = await get_owned(session, Establishment, establishment_id, current_user, "establishment")
    return EstablishmentRead.model_validate(establishment)


@router.put(
    "/{establishment_id}",
    response_model=EstablishmentRead,
    summary="Update Establishment",
    description="Partially update an establishment; a changed EIK is verified again.",
    response_description="The updated establishment object.",
    responses={
        200: {"description": "Establishment updated"},
        403: {"description": "Establishment belongs to another user"},
        404: {"description": "Establishment not found"},
    },
)
async def update_establishment(
    establishment_id: int,
    payload: EstablishmentUpdate,
    current_user: CurrentUser,
    session: SessionDep,
) -> EstablishmentRead:
    """Update an establishment."""
    establishment = await get_owned(session, Establishment, establishment_id, current_user, "establishment")
    changes = changes_of(payload, nullable=frozenset({"vat_number"}))
    eik = changes.pop("eik", None)
    if eik is not None:
        _apply_eik(establishment, eik)
    establishment = await EstablishmentRepository(session).update(establishment, changes)
    return EstablishmentRead.model_validate(establishment)


@router.delete(
    "/{establishment_id}",
    response_model=DeletedResponse,
    summary="Delete Establishment",
    description="Delete an establishment of the caller.",
    response_description="Deletion acknowledgement.",
    responses={
        200: {"description": "Establishment deleted"},
        403: {"description": "Establishment belongs to another user"},
        404: {"description": "Establishment not found"},
    },
)
async def delete_establishment(
    establishment_id: int,
    current_user: CurrentUser,
    session: SessionDep,
) -> DeletedResponse:
    """Delete an establishment together with its personnel."""
    establishment = await get_owned(session, Establishment, establishment_id, current_user, "establishment")
    await EstablishmentRepository(session).delete_with_personnel(establishment)
    logger.info(f"Deleted establishment {establishment_id}")
    return DeletedResponse(message="Establishment deleted successfully", id=establishment_id)
