"""
API endpoints for business equipment temperature logs.

Logs are one temperature per equipment item (refrigerator 1, freezer 2, ...)
and day. They are produced by the daily generator, which can be triggered
here by an administrator or by the scheduler through ``/cron``.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Query, status

from haccp_journal.core.database.entities.businesses import Business
from haccp_journal.core.database.repositories import TemperatureLogRepository
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.domain.enums import EquipmentType
from haccp_journal.core.models.io.businesses import GenerateLogsRequest, GenerateLogsResponse, TemperatureLogRead
from haccp_journal.core.models.io.common import Page
from haccp_journal.server.services.deps import AdminUser, CurrentUser, SessionDep
from haccp_journal.server.services.generation import generate_daily_logs
from haccp_journal.server.services.ownership import get_owned

router = APIRouter(tags=["temperature-logs"])
logger = get_logger(__name__)


@router.post(
    "/generate",
    response_model=GenerateLogsResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate Daily Logs",
    description="Fill the missing equipment logs of every business for one day.",
    response_description="Number of generated logs and processed businesses.",
    responses={
        201: {"description": "Generation finished"},
        400: {"description": "Malformed date"},
        403: {"description": "Admin access required"},
    },
)
async def generate_logs(
    _admin: AdminUser,
    session: SessionDep,
    payload: Optional[GenerateLogsRequest] = None,
) -> GenerateLogsResponse:
    """
    Generate temperature logs.

    Items already logged on the day are skipped, so running this twice
    inserts nothing the second time.

    - **date**: Day to fill (YYYY-MM-DD), today when omitted.
    """
    result = await generate_daily_logs(session, payload.date if payload else None)
    return GenerateLogsResponse(
        message="Temperature logs generated successfully",
        date=result.log_date,
        logs_generated=result.logs_generated,
        businesses_processed=result.businesses_processed,
    )


@router.get(
    "/{business_id}",
    response_model=Page[TemperatureLogRead],
    summary="List Business Logs",
    description="Retrieve the temperature logs of a business, newest day first.",
    response_description="A page of logs.",
    responses={
        400: {"description": "Invalid filter or paging value"},
        403: {"description": "Business belongs to another user"},
        404: {"description": "Business not found"},
    },
)
async def list_logs(
    business_id: int,
    current_user: CurrentUser,
    session: SessionDep,
    start_date: Optional[dt.date] = Query(default=None, description="First day (inclusive)"),
    end_date: Optional[dt.date] = Query(default=None, description="Last day (inclusive)"),
    equipment_type: Optional[EquipmentType] = Query(default=None, description="Only this equipment type"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> Page[TemperatureLogRead]:
    """
    List temperature logs of a business.

    - **business_id**: Business owned by the caller (any business for admins).
    - **start_date**, **end_date**: Inclusive day range.
    - **equipment_type**: refrigerator, freezer, hot_display or cold_display.
    """
    await get_owned(session, Business, business_id, current_user, "business", allow_admin=True)
    filters = {
        "business_id": business_id,
        "equipment_type": equipment_type.value if equipment_type else None,
        "start_date": start_date,
        "end_date": end_date,
    }
    repo = TemperatureLogRepository(session)
    logs = await repo.list(limit=limit, offset=offset, filters=filters)
    return Page[TemperatureLogRead](
        items=[TemperatureLogRead.model_validate(log) for log in logs],
        total=await repo.count_matching(filters),
        limit=limit,
        offset=offset,
    )
