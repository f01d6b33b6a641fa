"""Catalog statistics response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from recipe_catalog.database.repositories.stats import CatalogStatsData
from recipe_catalog.schemas.base import APIResponse


class DifficultyBreakdown(APIResponse):
    easy: int = 0
    medium: int = 0
    hard: int = 0


class RecipeStats(APIResponse):
    total: int = Field(..., description="Active recipes")
    average_total_time: int = Field(..., description="Mean prep + cook minutes, rounded")
    average_servings: int = Field(..., description="Mean servings, rounded")
    by_difficulty: DifficultyBreakdown


class TopCategory(APIResponse):
    name: str
    recipe_count: int


class CategoryStats(APIResponse):
    total: int = Field(..., description="Active categories")
    top_categories: list[TopCategory] = Field(default_factory=list)


class RecentRecipe(APIResponse):
    id: int
    title: str
    created_at: datetime


class StatsResponse(APIResponse):
    """Response of ``GET /stats``; soft-deleted rows are excluded."""

    recipes: RecipeStats
    categories: CategoryStats
    recent_recipes: list[RecentRecipe]

    @classmethod
    def from_data(cls, data: CatalogStatsData) -> StatsResponse:
        return cls.model_validate(data.model_dump())
