"""Aggregate statistics over the active catalog."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from recipe_catalog.database.connection import get_database_pool


if TYPE_CHECKING:
    from asyncpg import Pool


# =============================================================================
# Data Transfer Objects
# =============================================================================


class DifficultyCounts(BaseModel):
    easy: int = 0
    medium: int = 0
    hard: int = 0


class RecipeStatsData(BaseModel):
    total: int = 0
    average_total_time: int = 0
    average_servings: int = 0
    by_difficulty: DifficultyCounts = Field(default_factory=DifficultyCounts)


class TopCategoryData(BaseModel):
    name: str
    recipe_count: int


class CategoryStatsData(BaseModel):
    total: int = 0
    top_categories: list[TopCategoryData] = Field(default_factory=list)


class RecentRecipeData(BaseModel):
    id: int
    title: str
    created_at: datetime


class CatalogStatsData(BaseModel):
    """Snapshot of the catalog; deleted rows are not counted."""

    recipes: RecipeStatsData
    categories: CategoryStatsData
    recent_recipes: list[RecentRecipeData]


# =============================================================================
# Repository
# =============================================================================


TOP_CATEGORY_LIMIT = 5
RECENT_RECIPE_LIMIT = 5


class StatsRepository:
    """Read-only aggregate queries."""

    def __init__(self, pool: Pool | None = None) -> None:
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()

    async def get_stats(self) -> CatalogStatsData:
        """Collect recipe, category and recency statistics."""
        recipe_query = """
            SELECT
                COUNT(*) AS total,
                COALESCE(ROUND(AVG(prep_time + cook_time)), 0) AS average_total_time,
                COALESCE(ROUND(AVG(servings)), 0) AS average_servings,
                COUNT(*) FILTER (WHERE difficulty = 'easy') AS easy,
                COUNT(*) FILTER (WHERE difficulty = 'medium') AS medium,
                COUNT(*) FILTER (WHERE difficulty = 'hard') AS hard
            FROM recipes
            WHERE deleted_at IS NULL
        """
        category_count_query = "SELECT COUNT(*) FROM categories WHERE deleted_at IS NULL"
        top_categories_query = """
            SELECT c.name, COUNT(r.id) AS recipe_count
            FROM categories c
            LEFT JOIN recipes r ON r.category_id = c.id AND r.deleted_at IS NULL
            WHERE c.deleted_at IS NULL
            GROUP BY c.id, c.name
            ORDER BY recipe_count DESC, c.name ASC
            LIMIT $1
        """
        recent_query = """
            SELECT id, title, created_at
            FROM recipes
            WHERE deleted_at IS NULL
            ORDER BY created_at DESC, id DESC
            LIMIT $1
        """

        async with self.pool.acquire() as conn:
            recipe_row = await conn.fetchrow(recipe_query)
            category_total = await conn.fetchval(category_count_query)
            top_rows = await conn.fetch(top_categories_query, TOP_CATEGORY_LIMIT)
            recent_rows = await conn.fetch(recent_query, RECENT_RECIPE_LIMIT)

        recipes = RecipeStatsData(
            total=recipe_row["total"],
            average_total_time=int(recipe_row["average_total_time"]),
            average_servings=int(recipe_row["average_servings"]),
            by_difficulty=DifficultyCounts(
                easy=recipe_row["easy"],
                medium=recipe_row["medium"],
                hard=recipe_row["hard"],
            ),
        )
        return CatalogStatsData(
            recipes=recipes,
            categories=CategoryStatsData(
                total=category_total or 0,
                top_categories=[TopCategoryData.model_validate(dict(row)) for row in top_rows],
            ),
            recent_recipes=[RecentRecipeData.model_validate(dict(row)) for row in recent_rows],
        )
