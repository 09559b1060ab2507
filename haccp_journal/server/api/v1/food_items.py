"""
API endpoints for food items.

Food items are the dishes of the caller with their core cooking temperature
and shelf life; the food diary refers to them.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status
from sqlalchemy import delete

from haccp_journal.core.database.entities.food import FoodDiary, FoodItem
from haccp_journal.core.database.repositories import FoodItemRepository
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.io.common import DeletedResponse, changes_of
from haccp_journal.core.models.io.food import FoodItemCreate, FoodItemRead, FoodItemUpdate
from haccp_journal.server.services.deps import CurrentUser, SessionDep
from haccp_journal.server.services.ownership import check_optional_establishment, get_owned

router = APIRouter(tags=["food-items"])
logger = get_logger(__name__)

_NOT_FOUND_OR_FORBIDDEN = {
    403: {"description": "Food item belongs to another user"},
    404: {"description": "Food item not found"},
}


@router.get(
    "",
    response_model=list[FoodItemRead],
    summary="List Own Food Items",
    description="Retrieve the caller's food items ordered by name.",
    response_description="A list of food items.",
)
async def list_food_items(
    current_user: CurrentUser,
    session: SessionDep,
    establishment_id: Optional[int] = Query(default=None, description="Only items of this establishment"),
) -> list[FoodItemRead]:
    """List the caller's food items."""
    items = await FoodItemRepository(session).list(
        filters={"user_id": current_user.id, "establishment_id": establishment_id}
    )
    return [FoodItemRead.model_validate(item) for item in items]


@router.post(
    "",
    response_model=FoodItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Food Item",
    description="Add a dish to the caller's food items.",
    response_description="The created food item.",
    responses={
        201: {"description": "Food item created"},
        400: {"description": "Invalid data"},
        403: {"description": "Establishment belongs to another user"},
        404: {"description": "Establishment not found"},
    },
)
async def create_food_item(payload: FoodItemCreate, current_user: CurrentUser, session: SessionDep) -> FoodItemRead:
    """
    Create a food item.

    - **name**: Dish name.
    - **cooking_temperature**: Optional core temperature in °C.
    - **shelf_life_hours**: Hours the dish may be kept, greater than zero.
    """
    await check_optional_establishment(session, payload.establishment_id, current_user)
    item = await FoodItemRepository(session).create(FoodItem(user_id=current_user.id, **payload.model_dump()))
    logger.info(f"Created food item {item.id}")
    return FoodItemRead.model_validate(item)


@router.get(
    "/{item_id}",
    response_model=FoodItemRead,
    summary="Get Food Item",
    description="Retrieve a food item of the caller.",
    response_description="The food item.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def get_food_item(item_id: int, current_user: CurrentUser, session: SessionDep) -> FoodItemRead:
    """Get food item by ID."""
    item = await get_owned(session, FoodItem, item_id, current_user, "food item")
    return FoodItemRead.model_validate(item)


@router.put(
    "/{item_id}",
    response_model=FoodItemRead,
    summary="Update Food Item",
    description="Partially update a food item; existing diary entries keep their values.",
    response_description="The updated food item.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def update_food_item(
    item_id: int,
    payload: FoodItemUpdate,
    current_user: CurrentUser,
    session: SessionDep,
) -> FoodItemRead:
    """Update a food item."""
    item = await get_owned(session, FoodItem, item_id, current_user, "food item")
    changes = changes_of(payload, nullable=frozenset({"establishment_id", "cooking_temperature"}))
    await check_optional_establishment(session, changes.get("establishment_id"), current_user)
    item = await FoodItemRepository(session).update(item, changes)
    return FoodItemRead.model_validate(item)


@router.delete(
    "/{item_id}",
    response_model=DeletedResponse,
    summary="Delete Food Item",
    description="Delete a food item together with its diary entries.",
    response_description="Deletion acknowledgement.",
    responses=_NOT_FOUND_OR_FORBIDDEN,
)
async def delete_food_item(item_id: int, current_user: CurrentUser, session: SessionDep) -> DeletedResponse:
    """Delete a food item and its diary entries."""
    item = await get_owned(session, FoodItem, item_id, current_user, "food item")
    await session.execute(delete(FoodDiary).where(FoodDiary.food_item_id == item.id))
    await session.delete(item)
    await session.commit()
    logger.info(f"Deleted food item {item_id}")
    return DeletedResponse(message="Food item deleted successfully", id=item_id)
