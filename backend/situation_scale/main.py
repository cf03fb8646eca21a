"""Situation Scale API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GameError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - One RoomBroadcaster per process, shared by REST commands and /ws

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Broadcaster created at import time on app.state: it holds no IO resources,
      so it exists even when the lifespan is not run (WebSocket test client)
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from situation_scale.api.error_handlers import register_error_handlers
from situation_scale.api.routes import games, health, room_socket, situations, themes
from situation_scale.config import get_settings
from situation_scale.infrastructure import database
from situation_scale.infrastructure.observability import setup_logging
from situation_scale.infrastructure.room_broadcast import RoomBroadcaster

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
    logger.info("Situation Scale API started")
    yield
    logger.info("Situation Scale API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="Situation Scale API", version="1.0.0", lifespan=lifespan,
)
app.state.broadcaster = RoomBroadcaster()

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(themes.router)
app.include_router(games.router)
app.include_router(situations.router)
app.include_router(room_socket.router)

# Static files — serves the built web client in production
# Mounted AFTER API routes so /api/v1/* and /ws take precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
