"""Recipe data repository.

Provides the data access layer for recipes stored in PostgreSQL:
- Filtered, sorted and paginated listing with an accurate total count
- Lookups joined to the category name
- Partial updates built from the fields actually supplied
- Soft delete, restore and hard delete
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import asyncpg
from pydantic import BaseModel

from recipe_catalog.database.connection import get_database_pool
from recipe_catalog.database.exceptions import UnknownCategoryError
from recipe_catalog.database.query import (
    PaginationData,
    SqlFilter,
    affected_rows,
    build_pagination,
    build_set_clause,
    contains_pattern,
    quote_identifier,
    sort_direction,
)
from recipe_catalog.observability.logging import get_logger
from recipe_catalog.schemas.enums import Difficulty, RecipeSortField


if TYPE_CHECKING:
    from asyncpg import Pool, Record

logger = get_logger(__name__)


# =============================================================================
# Data Transfer Objects
# =============================================================================


class RecipeData(BaseModel):
    """A recipe row, annotated with the name of its category."""

    id: int
    title: str
    description: str | None = None
    ingredients: str
    instructions: str
    prep_time: int
    cook_time: int
    servings: int
    difficulty: Difficulty
    category_id: int | None = None
    category_name: str | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        """Whether the recipe is soft-deleted."""
        return self.deleted_at is not None


class RecipeCreate(BaseModel):
    """Fields for a new recipe. Validation happens before this point."""

    title: str
    description: str | None = None
    ingredients: str
    instructions: str
    prep_time: int
    cook_time: int
    servings: int
    difficulty: Difficulty | None = None
    category_id: int | None = None


class RecipeUpdate(BaseModel):
    """Sparse patch: only fields explicitly set are written, ``None`` included."""

    title: str | None = None
    description: str | None = None
    ingredients: str | None = None
    instructions: str | None = None
    prep_time: int | None = None
    cook_time: int | None = None
    servings: int | None = None
    difficulty: Difficulty | None = None
    category_id: int | None = None


class RecipeListOptions(BaseModel):
    """Listing options with their defaults."""

    limit: int = 10
    offset: int = 0
    search: str | None = None
    difficulty: Difficulty | None = None
    category_id: int | None = None
    # Kept as plain strings: unknown values fall back instead of failing.
    sort: str = RecipeSortField.CREATED_AT.value
    order: str = "desc"
    include_deleted: bool = False


class RecipePage(BaseModel):
    """One page of recipes plus pagination metadata."""

    recipes: list[RecipeData]
    pagination: PaginationData


# =============================================================================
# Repository
# =============================================================================


_RECIPE_SELECT = """
    SELECT r.*, c.name AS category_name
    FROM recipes r
    LEFT JOIN categories c ON c.id = r.category_id
"""

_SORT_EXPRESSIONS: dict[str, str] = {
    RecipeSortField.TITLE: "LOWER(r.title)",
    RecipeSortField.PREP_TIME: "r.prep_time",
    RecipeSortField.COOK_TIME: "r.cook_time",
    RecipeSortField.CREATED_AT: "r.created_at",
    RecipeSortField.SERVINGS: "r.servings",
    RecipeSortField.TOTAL_TIME: "(COALESCE(r.prep_time, 0) + COALESCE(r.cook_time, 0))",
}


class RecipeRepository:
    """Repository for recipe data access.

    Uses raw asyncpg queries. Each call acquires a pool connection for the
    duration of its statements; nothing is wrapped in a transaction.
    """

    def __init__(
        self,
        pool: Pool | None = None,
        *,
        title_collation: str | None = None,
    ) -> None:
        """Initialize repository with optional connection pool.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
            title_collation: Collation applied when sorting by title. None
                uses the database default.
        """
        self._pool = pool
        self._title_collation = title_collation

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()

    async def list(self, options: RecipeListOptions | None = None) -> RecipePage:
        """List recipes matching all given filters.

        ``pagination.total`` counts every matching row, ignoring limit and
        offset; ``pagination.returned`` is the size of this page.
        """
        options = options or RecipeListOptions()
        sql_filter = self._build_filter(options)
        limit_clause, page_values = sql_filter.page(options.limit, options.offset)

        query = (
            f"{_RECIPE_SELECT} {sql_filter.clause} "
            f"ORDER BY {self._order_by(options.sort, options.order)} {limit_clause}"
        )
        count_query = f"SELECT COUNT(*) FROM recipes r {sql_filter.clause}"

        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, *page_values)
            total = await conn.fetchval(count_query, *sql_filter.values)

        recipes = [self._row_to_recipe(row) for row in rows]
        return RecipePage(
            recipes=recipes,
            pagination=build_pagination(
                total=total or 0,
                limit=options.limit,
                offset=options.offset,
                returned=len(recipes),
            ),
        )

    async def get(self, recipe_id: int, include_deleted: bool = False) -> RecipeData | None:
        """Get a recipe by id, or None when absent (or deleted, by default)."""
        query = f"{_RECIPE_SELECT} WHERE r.id = $1"
        if not include_deleted:
            query += " AND r.deleted_at IS NULL"

        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, recipe_id)

        return self._row_to_recipe(row) if row is not None else None

    async def create(self, data: RecipeCreate) -> RecipeData | None:
        """Insert an active recipe and return it as read back from the database.

        Raises:
            UnknownCategoryError: ``category_id`` does not reference a category.
        """
        query = """
            INSERT INTO recipes (
                title, description, ingredients, instructions,
                prep_time, cook_time, servings, difficulty, category_id
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
            RETURNING id
        """
        difficulty = data.difficulty or Difficulty.MEDIUM

        try:
            async with self.pool.acquire() as conn:
                recipe_id = await conn.fetchval(
                    query,
                    data.title,
                    data.description,
                    data.ingredients,
                    data.instructions,
                    data.prep_time,
                    data.cook_time,
                    data.servings,
                    difficulty.value,
                    data.category_id,
                )
        except asyncpg.ForeignKeyViolationError as e:
            raise UnknownCategoryError(data.category_id) from e

        logger.debug("Inserted recipe", recipe_id=recipe_id)
        return await self.get(recipe_id)

    async def update(self, recipe_id: int, patch: RecipeUpdate) -> RecipeData | None:
        """Apply the fields set on ``patch``; an empty patch changes nothing.

        Raises:
            UnknownCategoryError: the new ``category_id`` does not exist.
        """
        changes = patch.model_dump(exclude_unset=True)
        if not changes:
            return await self.get(recipe_id)

        if isinstance(changes.get("difficulty"), Difficulty):
            changes["difficulty"] = changes["difficulty"].value

        sql_filter = SqlFilter()
        assignments = build_set_clause(changes, sql_filter)
        query = (
            f"UPDATE recipes SET {assignments}, updated_at = NOW() "
            f"WHERE id = {sql_filter.bind(recipe_id)}"
        )

        try:
            async with self.pool.acquire() as conn:
                await conn.execute(query, *sql_filter.values)
        except asyncpg.ForeignKeyViolationError as e:
            raise UnknownCategoryError(changes.get("category_id")) from e

        return await self.get(recipe_id)

    async def delete(self, recipe_id: int) -> bool:
        """Soft-delete an active recipe. Returns False if nothing changed."""
        query = """
            UPDATE recipes SET deleted_at = NOW()
            WHERE id = $1 AND deleted_at IS NULL
        """
        async with self.pool.acquire() as conn:
            status = await conn.execute(query, recipe_id)
        return affected_rows(status) > 0

    async def restore(self, recipe_id: int) -> RecipeData | None:
        """Clear ``deleted_at``; returns None when the recipe does not exist.

        No state check here: callers reject restoring an active recipe.
        """
        query = "UPDATE recipes SET deleted_at = NULL WHERE id = $1"
        async with self.pool.acquire() as conn:
            status = await conn.execute(query, recipe_id)

        if affected_rows(status) == 0:
            return None
        return await self.get(recipe_id)

    async def hard_delete(self, recipe_id: int) -> bool:
        """Permanently remove a recipe, deleted or not. Irreversible."""
        async with self.pool.acquire() as conn:
            status = await conn.execute("DELETE FROM recipes WHERE id = $1", recipe_id)
        return affected_rows(status) > 0

    async def list_deleted(self) -> list[RecipeData]:
        """All soft-deleted recipes, most recently deleted first."""
        query = (
            f"{_RECIPE_SELECT} WHERE r.deleted_at IS NOT NULL "
            "ORDER BY r.deleted_at DESC, r.id DESC"
        )
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query)
        return [self._row_to_recipe(row) for row in rows]

    def _build_filter(self, options: RecipeListOptions) -> SqlFilter:
        sql_filter = SqlFilter()

        if not options.include_deleted:
            sql_filter.where("r.deleted_at IS NULL")

        if options.search:
            term = sql_filter.bind(contains_pattern(options.search))
            sql_filter.where(
                f"(r.title ILIKE {term} OR r.description ILIKE {term} "
                f"OR r.ingredients ILIKE {term})"
            )

        if options.difficulty is not None:
            sql_filter.where(f"r.difficulty = {sql_filter.bind(options.difficulty.value)}")

        if options.category_id is not None:
            sql_filter.where(f"r.category_id = {sql_filter.bind(options.category_id)}")

        return sql_filter

    def _order_by(self, sort: str, order: str | None) -> str:
        """ORDER BY expression; unknown sort fields fall back to created_at.

        Ties are broken by id in the same direction.
        """
        direction = sort_direction(order)
        expression = _SORT_EXPRESSIONS.get(sort, _SORT_EXPRESSIONS[RecipeSortField.CREATED_AT])
        if sort == RecipeSortField.TITLE and self._title_collation:
            expression += f" COLLATE {quote_identifier(self._title_collation)}"
        return f"{expression} {direction}, r.id {direction}"

    @staticmethod
    def _row_to_recipe(row: Record) -> RecipeData:
        """Convert database row to RecipeData DTO."""
        return RecipeData.model_validate(dict(row))
