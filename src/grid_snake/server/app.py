"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from grid_snake.server.routes import router
from grid_snake.server.session_manager import MAX_FINISHED_SESSIONS, SessionManager
from grid_snake.server.websocket import ws_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    manager = SessionManager(max_finished_sessions=app.state.max_finished_sessions)
    app.state.session_manager = manager
    logger.info(
        "Grid Snake server started (retaining up to %d finished sessions).",
        app.state.max_finished_sessions,
    )
    try:
        yield
    finally:
        active = len(manager.list_sessions())
        await manager.cleanup()
        logger.info("Grid Snake server stopped (%d sessions still open).", active)


def create_app(max_finished_sessions: int = MAX_FINISHED_SESSIONS) -> FastAPI:
    """Build the application; sessions live only for the process lifetime."""
    app = FastAPI(
        title="Grid Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.state.max_finished_sessions = max_finished_sessions
    app.include_router(router)
    app.include_router(ws_router)
    return app
