"""Postboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PostboardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - Stored images served from /images when the images directory exists
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

import app.infrastructure.database as database
from app.api.error_handlers import register_error_handlers
from app.infrastructure.observability import setup_logging
from app.config import get_settings
from app.api.routes import auth, feed, health, operations, post_image

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Postboard API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Postboard API shutting down")


app = FastAPI(
    title="Postboard API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(operations.router)
app.include_router(post_image.router)
app.include_router(auth.router)
app.include_router(feed.router)

if os.path.isdir(settings.images_dir):
    app.mount(
        "/images", StaticFiles(directory=settings.images_dir), name="images",
    )

register_error_handlers(app)
