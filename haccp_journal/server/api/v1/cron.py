"""
Scheduler endpoints.

Called by an external scheduler with a shared secret instead of a bearer
token. Nothing here runs on its own inside the server process.
"""

from __future__ import annotations

import hmac

from fastapi import APIRouter, Query

from haccp_journal.core.database.base import utc_now
from haccp_journal.core.errors import unauthorized
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.io.businesses import CronLogsResponse
from haccp_journal.server.core.config import settings
from haccp_journal.server.services.deps import SessionDep
from haccp_journal.server.services.generation import generate_daily_logs

router = APIRouter(tags=["cron"])
logger = get_logger(__name__)


@router.get(
    "/generate-daily-logs",
    response_model=CronLogsResponse,
    summary="Scheduled Daily Logs",
    description="Fill today's missing equipment logs of every business.",
    response_description="Outcome of the run.",
    responses={401: {"description": "Missing or wrong cron secret"}},
)
async def generate_daily_logs_job(
    session: SessionDep,
    secret: str = Query(default="", description="Shared cron secret"),
) -> CronLogsResponse:
    """
    Run the daily log generation.

    The endpoint is disabled while ``CRON_SECRET`` is empty.
    """
    expected = settings.cron_secret
    if not expected or not hmac.compare_digest(secret.encode(), expected.encode()):
        logger.warning("Rejected cron call with an invalid secret")
        raise unauthorized("Unauthorized - Invalid cron secret")

    result = await generate_daily_logs(session)
    return CronLogsResponse(
        message="Daily temperature logs generated successfully",
        date=result.log_date,
        logs_generated=result.logs_generated,
        businesses_processed=result.businesses_processed,
        timestamp=utc_now(),
    )
