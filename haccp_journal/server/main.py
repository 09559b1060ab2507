"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from haccp_journal import __version__
from haccp_journal.core.database.session import init_db
from haccp_journal.core.logging_config import get_logger, setup_logging
from haccp_journal.core.monitoring import initialize_logfire

from .api.v1 import (
    admin,
    auth,
    businesses,
    cleaning_logs,
    cleaning_templates,
    cron,
    diary_devices,
    establishments,
    food_diary,
    food_items,
    health,
    incoming_controls,
    personnel,
    temperature_logs,
    temperature_readings,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the schema when enabled; a failure is logged and the server keeps
    starting so that health checks can report it.
    """
    # Startup
    try:
        logger.info("Starting up HACCP Journal Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down HACCP Journal Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    HACCP Journal Server API

    Record keeping for Bulgarian food-service businesses: establishments and
    their personnel, temperature diaries of refrigeration and hot-holding
    equipment, incoming goods controls, cleaning schedules and food diaries.
    """,
    version=__version__,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth")
app.include_router(businesses.router, prefix=f"{constant.API_V1_STR}/businesses")
app.include_router(establishments.router, prefix=f"{constant.API_V1_STR}/establishments")
app.include_router(personnel.router, prefix=f"{constant.API_V1_STR}/personnel")
app.include_router(diary_devices.router, prefix=f"{constant.API_V1_STR}/diary-devices")
app.include_router(temperature_readings.router, prefix=f"{constant.API_V1_STR}/temperature-readings")
app.include_router(temperature_logs.router, prefix=f"{constant.API_V1_STR}/temperature-logs")
app.include_router(incoming_controls.router, prefix=f"{constant.API_V1_STR}/incoming-controls")
app.include_router(cleaning_templates.router, prefix=f"{constant.API_V1_STR}/cleaning-templates")
app.include_router(cleaning_logs.router, prefix=f"{constant.API_V1_STR}/cleaning-logs")
app.include_router(food_items.router, prefix=f"{constant.API_V1_STR}/food-items")
app.include_router(food_diary.router, prefix=f"{constant.API_V1_STR}/food-diary")
app.include_router(cron.router, prefix=f"{constant.API_V1_STR}/cron")
app.include_router(admin.router, prefix=f"{constant.API_V1_STR}/admin")


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    run()
