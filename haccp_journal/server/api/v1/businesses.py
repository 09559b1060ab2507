"""
API endpoints for business profiles.

A business is created at registration; its owner can read it and update its
contact data and equipment counts. Administrators can access every business.
"""

from __future__ import annotations

from fastapi import APIRouter
from sqlmodel import select

from haccp_journal.core.database.entities.businesses import Business
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.io.businesses import BusinessRead, BusinessUpdate
from haccp_journal.core.models.io.common import changes_of
from haccp_journal.server.services.deps import CurrentUser, SessionDep
from haccp_journal.server.services.ownership import get_owned

router = APIRouter(tags=["businesses"])
logger = get_logger(__name__)


@router.get(
    "",
    response_model=list[BusinessRead],
    summary="List Own Businesses",
    description="Retrieve the businesses owned by the caller.",
    response_description="A list of business objects.",
)
async def list_businesses(current_user: CurrentUser, session: SessionDep) -> list[BusinessRead]:
    """List the caller's businesses, oldest first."""
    statement = select(Business).where(Business.user_id == current_user.id).order_by(Business.id)
    result = await session.execute(statement)
    return [BusinessRead.model_validate(b) for b in result.scalars().all()]


@router.get(
    "/{business_id}",
    response_model=BusinessRead,
    summary="Get Business",
    description="Retrieve a business by its identifier.",
    response_description="The business object.",
    responses={
        200: {"description": "Business found"},
        403: {"description": "Business belongs to another user"},
        404: {"description": "Business not found"},
    },
)
async def get_business(business_id: int, current_user: CurrentUser, session: SessionDep) -> BusinessRead:
    """
    Get business by ID.

    - **business_id**: The unique identifier of the business.
    """
    business = await get_owned(session, Business, business_id, current_user, "business", allow_admin=True)
    return BusinessRead.model_validate(business)


@router.put(
    "/{business_id}",
    response_model=BusinessRead,
    summary="Update Business",
    description="Partially update a business profile.",
    response_description="The updated business object.",
    responses={
        200: {"description": "Business updated"},
        400: {"description": "No fields or invalid values provided"},
        403: {"description": "Business belongs to another user"},
        404: {"description": "Business not found"},
    },
)
async def update_business(
    business_id: int,
    payload: BusinessUpdate,
    current_user: CurrentUser,
    session: SessionDep,
) -> BusinessRead:
    """
    Update a business.

    Only the supplied fields change. Text fields must not be blank and
    equipment counts must not be negative.

    - **refrigerator_count**, **freezer_count**, **hot_display_count**,
      **cold_display_count**: Number of items that get a daily temperature log.
    """
    business = await get_owned(session, Business, business_id, current_user, "business", allow_admin=True)
    for key, value in changes_of(payload, nullable=frozenset({"other_equipment"})).items():
        setattr(business, key, value)
    session.add(business)
    await session.commit()
    await session.refresh(business)
    logger.info(f"Updated business {business_id}")
    return BusinessRead.model_validate(business)
