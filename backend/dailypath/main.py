"""Daily Path API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DailyPathError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and catalog initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py, registered once here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dailypath.api.error_handlers import register_error_handlers
from dailypath.api.routes import admin, catalog, daily, health, results
from dailypath.config import get_settings
from dailypath.infrastructure import database
from dailypath.infrastructure.catalog_provider import init_catalog
from dailypath.infrastructure.database import init_db
from dailypath.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_catalog(settings.catalog_path)
    if not settings.admin_token:
        logger.warning("ADMIN_TOKEN is not set; admin endpoints will reject every request")
    logger.info("Daily Path API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Daily Path API shutting down")


app = FastAPI(
    title="Daily Path API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type"],
)

app.include_router(health.router)
app.include_router(daily.router)
app.include_router(catalog.router)
app.include_router(results.router)
app.include_router(admin.router)

register_error_handlers(app)
