"""PostgreSQL schema for the recipe catalog.

Every statement is idempotent, so ``create_schema`` is safe to run on each
deployment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_catalog.database.connection import get_database_pool
from recipe_catalog.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Categories: names are unique among rows that are not soft-deleted
CREATE TABLE IF NOT EXISTS categories (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    description     TEXT,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    deleted_at      TIMESTAMPTZ
);

-- Recipes: a removed category leaves its recipes uncategorized
CREATE TABLE IF NOT EXISTS recipes (
    id              SERIAL PRIMARY KEY,
    title           VARCHAR(200) NOT NULL,
    description     TEXT,
    ingredients     TEXT NOT NULL,
    instructions    TEXT NOT NULL,
    prep_time       INTEGER NOT NULL CHECK (prep_time >= 0),
    cook_time       INTEGER NOT NULL CHECK (cook_time >= 0),
    servings        INTEGER NOT NULL DEFAULT 1 CHECK (servings >= 1),
    difficulty      VARCHAR(10) NOT NULL DEFAULT 'medium'
                    CHECK (difficulty IN ('easy', 'medium', 'hard')),
    category_id     INTEGER REFERENCES categories(id) ON DELETE SET NULL,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    deleted_at      TIMESTAMPTZ
);

CREATE UNIQUE INDEX IF NOT EXISTS uq_categories_active_name
    ON categories(name) WHERE deleted_at IS NULL;
CREATE INDEX IF NOT EXISTS idx_recipes_category_id ON recipes(category_id);
CREATE INDEX IF NOT EXISTS idx_recipes_deleted_at ON recipes(deleted_at);
"""


async def create_schema(pool: Pool | None = None) -> None:
    """Create tables and indexes that do not exist yet."""
    pool = pool or get_database_pool()
    async with pool.acquire() as conn:
        await conn.execute(SCHEMA_SQL)
    logger.info("Database schema initialized")
