"""
PostgreSQL access for Studio.

Repos borrow connections through user_conn() (row-level security scoped to
one user) or system_conn() (unscoped, for login and registration). Each
borrowed connection runs inside a single transaction.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from uuid import UUID

import asyncpg

from backend import config

logger = logging.getLogger(__name__)

pool: asyncpg.Pool | None = None


async def init_pool() -> None:
    """Open the shared asyncpg pool. Called from the app lifespan."""
    global pool
    pool = await asyncpg.create_pool(
        dsn=config.DATABASE_URL,
        min_size=2,
        max_size=20,
        command_timeout=60,
        init=_init_connection,
    )
    logger.info("Database pool initialized")


async def close_pool() -> None:
    """Close the pool if it is open."""
    global pool
    if pool is not None:
        await pool.close()
        pool = None
        logger.info("Database pool closed")


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Decode UUID columns to uuid.UUID on every new connection."""
    await conn.set_type_codec(
        "uuid",
        encoder=str,
        decoder=lambda x: UUID(x),
        schema="pg_catalog",
    )


def _require_pool() -> asyncpg.Pool:
    if pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return pool


@asynccontextmanager
async def user_conn(user_id: str | UUID):
    """
    Acquire a connection scoped to one user via RLS.

    Projects and files are only visible to their owner: every policy
    checks current_setting('app.user_id').

    Usage:
        async with user_conn(user_id) as conn:
            rows = await conn.fetch("SELECT * FROM files WHERE project_id = $1", project_id)
    """
    async with _require_pool().acquire() as conn:
        async with conn.transaction():
            await conn.execute(
                "SELECT set_config('app.user_id', $1, true)",
                str(user_id),
            )
            yield conn


@asynccontextmanager
async def system_conn():
    """
    Acquire a connection without user scoping.

    Only for operations that run before a user is known (register, login)
    and for the users table itself.
    """
    async with _require_pool().acquire() as conn:
        async with conn.transaction():
            # Empty app.user_id is the RLS bypass marker; LOCAL so it resets with the transaction
            await conn.execute("SELECT set_config('app.user_id', '', true)")
            yield conn
