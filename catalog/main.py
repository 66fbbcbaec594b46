"""Catalog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CatalogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Every request gets an X-Request-Id and one access log line
    - Database initialized (and optionally authenticated) on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.api.error_handlers import handle_unexpected_error, register_error_handlers
from catalog.api.routes import categories, health
from catalog.config import get_settings
from catalog.core.errors import DatabaseError
from catalog.infrastructure.database import init_db
from catalog.infrastructure.observability import (
    RequestLoggingMiddleware, setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout,
        pool_recycle=settings.database_pool_recycle,
        echo=settings.database_echo,
    )
    if settings.database_verify_on_startup and not await manager.health_check():
        await manager.dispose()
        raise DatabaseError("Unable to reach the database", "connect")
    logger.info("Catalog API started")
    yield
    await manager.dispose()
    logger.info("Catalog API shutting down")


settings = get_settings()
app = FastAPI(
    title="Catalog API", version=settings.service_version, lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware, on_error=handle_unexpected_error)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(categories.router)
