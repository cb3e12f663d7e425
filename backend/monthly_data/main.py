"""Monthly Data API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MonthlyDataError → structured JSON responses
    - CORS configured from settings
    - Database manager opened on startup and disposed on shutdown (lifespan)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from monthly_data.api.error_handlers import register_error_handlers
from monthly_data.api.routes import health, monthly_data
from monthly_data.config import get_settings
from monthly_data.infrastructure.database import DatabaseSessionManager
from monthly_data.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Monthly Data API started")
    try:
        yield
    finally:
        await app.state.db_manager.close()
        app.state.db_manager = None
        logger.info("Monthly Data API shut down")


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title="Monthly Data API", version="1.0.0", lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(health.router)
    application.include_router(monthly_data.router)
    register_error_handlers(application)
    return application


app = create_app()
