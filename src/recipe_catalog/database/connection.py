"""The process-wide asyncpg pool.

``init_database_pool`` and ``close_database_pool`` are called from the
application lifespan (and from ``scripts/python/setup_database.py``);
repositories fall back to ``get_database_pool`` when they were not given a
pool explicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from recipe_catalog.core.config import get_settings
from recipe_catalog.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

_pool: Pool | None = None


async def init_database_pool() -> Pool:
    """Open the pool and check it with ``SELECT 1``.

    A second call returns the pool already open. If the check fails the new
    pool is closed again and the error propagates.
    """
    global _pool  # noqa: PLW0603

    if _pool is not None:
        return _pool

    db = get_settings().database
    logger.info(
        "Opening database pool",
        host=db.host,
        port=db.port,
        database=db.name,
        min_size=db.min_pool_size,
        max_size=db.max_pool_size,
    )

    pool = await asyncpg.create_pool(
        host=db.host,
        port=db.port,
        database=db.name,
        user=db.user,
        password=get_settings().DATABASE_PASSWORD or None,
        min_size=db.min_pool_size,
        max_size=db.max_pool_size,
        command_timeout=db.command_timeout,
        ssl=True if db.ssl else None,
    )

    try:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError):
        logger.exception("Database did not answer the connectivity check")
        await pool.close()
        raise

    _pool = pool
    logger.info("Database pool open")
    return pool


async def close_database_pool() -> None:
    """Close the pool if one is open."""
    global _pool  # noqa: PLW0603

    if _pool is None:
        return

    pool, _pool = _pool, None
    await pool.close()
    logger.info("Database pool closed")


def get_database_pool() -> Pool:
    """Return the open pool.

    Raises:
        RuntimeError: ``init_database_pool`` has not run.
    """
    if _pool is None:
        msg = "Database pool not initialized; init_database_pool() must run first"
        raise RuntimeError(msg)
    return _pool


async def check_database_health() -> dict[str, str]:
    """Readiness probe: ``{"database": "healthy" | "unhealthy" | "not_initialized"}``."""
    if _pool is None:
        return {"database": "not_initialized"}

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
        logger.warning("Database health check failed", error=str(e))
        return {"database": "unhealthy"}
    return {"database": "healthy"}
