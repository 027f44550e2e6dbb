"""
Studio FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend import config, db
from backend.middleware.rate_limit import rate_limiter
from backend.routes import auth_routes
from backend.routes import files as file_routes
from backend.routes import github as github_routes
from backend.routes import preview as preview_routes
from backend.routes import projects as project_routes

logging.basicConfig(
    level=config.settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def cleanup_task():
    """
    Background task that drops stale login rate-limit entries.

    Runs every 60 seconds.
    """
    while True:
        try:
            rate_limiter.cleanup_old_entries(max_age_hours=1)
        except Exception:
            logger.exception("Error in cleanup task")

        await asyncio.sleep(60)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown logic:
    - Initialize database pool
    - Start background cleanup task
    - Close database pool on shutdown
    """
    await db.init_pool()

    cleanup_task_handle = asyncio.create_task(cleanup_task())
    logger.info("Background cleanup task started")

    yield

    cleanup_task_handle.cancel()
    try:
        await cleanup_task_handle
    except asyncio.CancelledError:
        logger.info("Background cleanup task stopped")

    await db.close_pool()


app = FastAPI(
    title="Studio",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(auth_routes.router)
app.include_router(project_routes.router)
app.include_router(file_routes.router)
app.include_router(preview_routes.router)
app.include_router(github_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
