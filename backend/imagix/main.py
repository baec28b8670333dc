"""Imagix API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map ImagixError → {"message", "code"} JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py and are registered once here
    - Router order matters: fixed world sub-paths (relationships, stories) are
      registered before the entity router's /{collection} pattern
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from imagix.api.error_handlers import register_error_handlers
from imagix.api.routes import (
    chapters, entities, entity_events, entity_relationships, health,
    relationships, stories, worlds,
)
from imagix.config import get_settings
from imagix.infrastructure import database
from imagix.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_tables()
    logger.info("Imagix API started")
    yield
    await manager.close()
    logger.info("Imagix API shutting down")


app = FastAPI(title="Imagix API", version="1.0.0", lifespan=lifespan)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes — explicit registration, entities last
app.include_router(health.router)
app.include_router(worlds.router)
app.include_router(relationships.router)
app.include_router(stories.router)
app.include_router(entities.router)
app.include_router(entity_relationships.router)
app.include_router(entity_events.router)
app.include_router(chapters.router)
