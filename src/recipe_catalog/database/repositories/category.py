"""Category data repository.

Categories carry a ``recipe_count`` derived at read time from the active
recipes that reference them. Soft deletion is refused while that count is
non-zero.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import asyncpg
from pydantic import BaseModel

from recipe_catalog.database.connection import get_database_pool
from recipe_catalog.database.exceptions import CategoryInUseError, DuplicateCategoryNameError
from recipe_catalog.database.query import (
    PaginationData,
    SqlFilter,
    affected_rows,
    build_pagination,
    build_set_clause,
    contains_pattern,
)
from recipe_catalog.database.repositories.recipe import RecipeData
from recipe_catalog.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool, Record

logger = get_logger(__name__)


# =============================================================================
# Data Transfer Objects
# =============================================================================


class CategoryData(BaseModel):
    """A category row with its active recipe count."""

    id: int
    name: str
    description: str | None = None
    recipe_count: int = 0
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class CategoryCreate(BaseModel):
    name: str
    description: str | None = None


class CategoryUpdate(BaseModel):
    """Sparse patch; see ``RecipeUpdate``."""

    name: str | None = None
    description: str | None = None


class CategoryListOptions(BaseModel):
    limit: int = 50
    offset: int = 0
    search: str | None = None
    include_deleted: bool = False


class CategoryPage(BaseModel):
    categories: list[CategoryData]
    pagination: PaginationData


# =============================================================================
# Repository
# =============================================================================


_CATEGORY_SELECT = """
    SELECT c.*, COUNT(r.id) AS recipe_count
    FROM categories c
    LEFT JOIN recipes r ON r.category_id = c.id AND r.deleted_at IS NULL
"""


class CategoryRepository:
    """Repository for category data access."""

    def __init__(self, pool: Pool | None = None) -> None:
        """Initialize repository with optional connection pool.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
        """
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()

    async def list(self, options: CategoryListOptions | None = None) -> CategoryPage:
        """List categories ordered by name, each with its active recipe count."""
        options = options or CategoryListOptions()

        sql_filter = SqlFilter()
        if not options.include_deleted:
            sql_filter.where("c.deleted_at IS NULL")
        if options.search:
            term = sql_filter.bind(contains_pattern(options.search))
            sql_filter.where(f"(c.name ILIKE {term} OR c.description ILIKE {term})")

        limit_clause, page_values = sql_filter.page(options.limit, options.offset)
        query = (
            f"{_CATEGORY_SELECT} {sql_filter.clause} "
            f"GROUP BY c.id ORDER BY c.name ASC, c.id ASC {limit_clause}"
        )
        count_query = f"SELECT COUNT(*) FROM categories c {sql_filter.clause}"

        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, *page_values)
            total = await conn.fetchval(count_query, *sql_filter.values)

        categories = [self._row_to_category(row) for row in rows]
        return CategoryPage(
            categories=categories,
            pagination=build_pagination(
                total=total or 0,
                limit=options.limit,
                offset=options.offset,
                returned=len(categories),
            ),
        )

    async def get(self, category_id: int, include_deleted: bool = False) -> CategoryData | None:
        """Get a category by id with its recipe count."""
        condition = "WHERE c.id = $1"
        if not include_deleted:
            condition += " AND c.deleted_at IS NULL"
        query = f"{_CATEGORY_SELECT} {condition} GROUP BY c.id"

        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, category_id)

        return self._row_to_category(row) if row is not None else None

    async def recipes_of(self, category_id: int) -> list[RecipeData]:
        """Active recipes in a category, newest first.

        Does not check that the category exists.
        """
        query = """
            SELECT r.*, c.name AS category_name
            FROM recipes r
            LEFT JOIN categories c ON c.id = r.category_id
            WHERE r.category_id = $1 AND r.deleted_at IS NULL
            ORDER BY r.created_at DESC, r.id DESC
        """
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, category_id)
        return [RecipeData.model_validate(dict(row)) for row in rows]

    async def create(self, data: CategoryCreate) -> CategoryData | None:
        """Insert a category.

        Raises:
            DuplicateCategoryNameError: an active category has the same name.
        """
        query = """
            INSERT INTO categories (name, description)
            VALUES ($1, $2)
            RETURNING id
        """
        try:
            async with self.pool.acquire() as conn:
                category_id = await conn.fetchval(query, data.name, data.description)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateCategoryNameError(data.name) from e

        logger.debug("Inserted category", category_id=category_id)
        return await self.get(category_id)

    async def update(self, category_id: int, patch: CategoryUpdate) -> CategoryData | None:
        """Apply the fields set on ``patch``.

        Raises:
            DuplicateCategoryNameError: the new name is taken by an active category.
        """
        changes = patch.model_dump(exclude_unset=True)
        if not changes:
            return await self.get(category_id)

        sql_filter = SqlFilter()
        assignments = build_set_clause(changes, sql_filter)
        query = (
            f"UPDATE categories SET {assignments}, updated_at = NOW() "
            f"WHERE id = {sql_filter.bind(category_id)}"
        )

        try:
            async with self.pool.acquire() as conn:
                await conn.execute(query, *sql_filter.values)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateCategoryNameError(changes.get("name")) from e

        return await self.get(category_id)

    async def exists_by_name(self, name: str, exclude_id: int | None = None) -> bool:
        """Whether an active category other than ``exclude_id`` has exactly this name."""
        query = "SELECT EXISTS(SELECT 1 FROM categories WHERE name = $1 AND deleted_at IS NULL"
        args: list[object] = [name]
        if exclude_id is not None:
            query += " AND id <> $2"
            args.append(exclude_id)
        query += ")"

        async with self.pool.acquire() as conn:
            return bool(await conn.fetchval(query, *args))

    async def delete(self, category_id: int) -> bool:
        """Soft-delete a category that no active recipe references.

        Returns:
            False when the category is absent or already deleted.

        Raises:
            CategoryInUseError: active recipes still reference the category.
        """
        category = await self.get(category_id)
        if category is None:
            return False
        if category.recipe_count > 0:
            raise CategoryInUseError(category_id, category.recipe_count)

        query = """
            UPDATE categories SET deleted_at = NOW()
            WHERE id = $1
              AND deleted_at IS NULL
              AND NOT EXISTS (
                  SELECT 1 FROM recipes
                  WHERE category_id = $1 AND deleted_at IS NULL
              )
        """
        async with self.pool.acquire() as conn:
            status = await conn.execute(query, category_id)
            if affected_rows(status) > 0:
                return True

            # A recipe may have been attached after the check above.
            recipe_count = await conn.fetchval(
                "SELECT COUNT(*) FROM recipes WHERE category_id = $1 AND deleted_at IS NULL",
                category_id,
            )

        if recipe_count:
            raise CategoryInUseError(category_id, recipe_count)
        return False

    async def restore(self, category_id: int) -> CategoryData | None:
        """Clear ``deleted_at``; returns None when the category does not exist.

        Raises:
            DuplicateCategoryNameError: an active category took the name meanwhile.
        """
        query = "UPDATE categories SET deleted_at = NULL WHERE id = $1"
        try:
            async with self.pool.acquire() as conn:
                status = await conn.execute(query, category_id)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateCategoryNameError() from e

        if affected_rows(status) == 0:
            return None
        return await self.get(category_id)

    @staticmethod
    def _row_to_category(row: Record) -> CategoryData:
        """Convert database row to CategoryData DTO."""
        return CategoryData.model_validate(dict(row))
