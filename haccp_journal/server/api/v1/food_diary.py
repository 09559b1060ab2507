"""
API endpoints for the food diary.

Diary entries record when a food item was prepared, at which temperature
and for how long it may be kept. Missing entries can be generated for a
range of past days.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, Optional

from fastapi import APIRouter, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from haccp_journal.core.database.entities.food import FoodDiary, FoodItem
from haccp_journal.core.database.repositories import FoodDiaryRepository
from haccp_journal.core.errors import conflict
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.io.common import DeletedResponse, Page, changes_of
from haccp_journal.core.models.io.food import (
    FoodDiaryCreate,
    FoodDiaryRead,
    FoodDiaryUpdate,
    GenerateFoodDiaryRequest,
    GenerateFoodDiaryResponse,
)
from haccp_journal.server.services.deps import CurrentUser, SessionDep
from haccp_journal.server.services.generation import generate_food_diary
from haccp_journal.server.services.ownership import get_owned

router = APIRouter(tags=["food-diary"])
logger = get_logger(__name__)

_NOT_FOUND_OR_FORBIDDEN = {
    403: {"description": "Entry belongs to another user"},
    404: {"description": "Entry not found"},
}


async def _with_names(session: AsyncSession, entries: Iterable[FoodDiary]) -> list[FoodDiaryRead]:
    entries = list(entries)
    item_ids = {entry.food_item_id for entry in entries}
    names: dict[int, str] = {}
    if item_ids:
        result = await session.execute(
            select(FoodItem.id, FoodItem.name).where(FoodItem.id.in_(item_ids))  # type: ignore[union-attr]
        )
        names = {row[0]: row[1] for row in result.all()}
    return [
        FoodDiaryRead.model_validate(entry).model_copy(update={"food_item_name": names.get(entry.food_item_id)})
        for entry in entries
    ]


@router.post(
    "/generate",
    response_model=GenerateFoodDiaryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate Food Diary",
    description="Fill the missing 08:00 and 17:00 entries of every food item for the last days.",
    response_description="Number of generated entries and the covered range.",
)
async def generate_entries(
    current_user: CurrentUser,
    session: SessionDep,
    payload: Optional[GenerateFoodDiaryRequest] = None,
) -> GenerateFoodDiaryResponse:
    """
    Generate food diary entries.

    The range runs from ``days_to_generate`` days ago up to today. Entries
    that already exist are kept.

    - **days_to_generate**: Past days to cover (0-365, default 20).
    """
    days = (payload or GenerateFoodDiaryRequest()).days_to_generate
    result = await generate_food_diary(session, current_user.id, days)
    if result.food_items_processed:
        message = "Food diary generated successfully"
    else:
        message = "No food items found to generate entries for"
    return GenerateFoodDiaryResponse(
        message=message,
        entries_generated=result.entries_generated,
        days_covered=result.days_covered,
        food_items_processed=result.food_items_processed,
        start_date=result.start_date,
        end_date=result.end_date,
    )


@router.get(
    "",
    response_model=Page[FoodDiaryRead],
    summary="List Own Entries",
    description="Retrieve the caller's food diary, newest day first.",
    response_description="A page of diary entries.",
)
async def list_entries(
    current_user: CurrentUser,
    session: SessionDep,
    food_item_id: Optional[int] = Query(default=None, description="Only entries of this food item"),
    establishment_id: Optional[int] = Query(default=None, description="Only entries of this establishment"),
    start_date: Optional[dt.date] = Query(default=None, description="First day (inclusive)"),
    end_date: Optional[dt.date] = Query(default=None, description="Last day (inclusive)"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> Page[FoodDiaryRead]:
    """List the caller's food diary entries."""
    filters = {
        "user_id": current_user.id,
        "food_item_id": food_item_id,
        "establishment_id": establishment_id,
        "start_date": start_date,
        "end_date": end_date,
    }
    repo = FoodDiaryRepository(session)
    entries = await repo.list(limit=limit, offset=offset, filters=filters)
    return Page[FoodDiaryRead](
        items=await _with_names(session, entries),
        total=await repo.count_matching(filters),
        limit=limit,
        offset=offset,
    )


@router.post(
    "",
    response_model=FoodDiaryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Preparation",
    description="Record a preparation of one of the caller's food items.",
    response_description="The created diary entry.",
    responses={
        201: {"description": "Entry created"},
        400: {"description": "Invalid data"},
        403: {"description": "Food item belongs to another user"},
        404: {"description": "Food item not found"},
        409: {"description": "An entry already exists for this item, day and time"},
    },
)
async def create_entry(payload: FoodDiaryCreate, current_user: CurrentUser, session: SessionDep) -> FoodDiaryRead:
    """
    Record a preparation.

    - **food_item_id**: Food item of the caller.
    - **date**, **time**: Day and ``HH:MM`` of the preparation.
    - **temperature**: Measured temperature; the item's cooking temperature when omitted.
    """
    item = await get_owned(session, FoodItem, payload.food_item_id, current_user, "food item")
    repo = FoodDiaryRepository(session)
    if (payload.date, payload.time) in await repo.existing_slots(item.id, payload.date, payload.date):
        raise conflict("ENTRY_EXISTS", "An entry already exists for this food item, date and time")

    entry = FoodDiary(
        user_id=current_user.id,
        food_item_id=item.id,
        establishment_id=item.establishment_id,
        date=payload.date,
        time=payload.time,
        quantity=payload.quantity,
        temperature=payload.temperature if payload.temperature is not None else item.cooking_temperature,
        shelf_life_hours=item.shelf_life_hours,
        notes=payload.notes,
    )
    entry = await repo.create(entry)
    return FoodDiaryRead.model_validate(entry).model_copy(update={"food_item_name": item.name})


@router.get(
    "/{entry_id}",
    response_model=FoodDiaryRead,
    summary="Get Entry",
    description="Retrieve a food diary entry of the caller.",
    response_description="The diary entry.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def get_entry(entry_id: int, current_user: CurrentUser, session: SessionDep) -> FoodDiaryRead:
    """Get food diary entry by ID."""
    entry = await get_owned(session, FoodDiary, entry_id, current_user, "food diary entry")
    return (await _with_names(session, [entry]))[0]


@router.put(
    "/{entry_id}",
    response_model=FoodDiaryRead,
    summary="Update Entry",
    description="Change the quantity, notes or time of an entry.",
    response_description="The updated diary entry.",
    responses={
        400: {"description": "Unknown or invalid field"},
        409: {"description": "Another entry already uses the new time"},
        **_NOT_FOUND_OR_FORBIDDEN,
    },
)
async def update_entry(
    entry_id: int,
    payload: FoodDiaryUpdate,
    current_user: CurrentUser,
    session: SessionDep,
) -> FoodDiaryRead:
    """Update a food diary entry."""
    entry = await get_owned(session, FoodDiary, entry_id, current_user, "food diary entry")
    changes = changes_of(payload, nullable=frozenset({"quantity", "notes"}))
    repo = FoodDiaryRepository(session)
    new_time = changes.get("time")
    if new_time and new_time != entry.time:
        if (entry.date, new_time) in await repo.existing_slots(entry.food_item_id, entry.date, entry.date):
            raise conflict("ENTRY_EXISTS", "An entry already exists for this food item, date and time")

    entry = await repo.update(entry, changes)
    return (await _with_names(session, [entry]))[0]


@router.delete(
    "/{entry_id}",
    response_model=DeletedResponse,
    summary="Delete Entry",
    description="Delete a food diary entry of the caller.",
    response_description="Deletion acknowledgement.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def delete_entry(entry_id: int, current_user: CurrentUser, session: SessionDep) -> DeletedResponse:
    """Delete a food diary entry."""
    await get_owned(session, FoodDiary, entry_id, current_user, "food diary entry")
    await FoodDiaryRepository(session).delete(entry_id)
    return DeletedResponse(message="Food diary entry deleted successfully", id=entry_id)
