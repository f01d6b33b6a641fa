"""Database repositories."""

from recipe_catalog.database.repositories.category import (
    CategoryCreate,
    CategoryData,
    CategoryListOptions,
    CategoryPage,
    CategoryRepository,
    CategoryUpdate,
)
from recipe_catalog.database.repositories.recipe import (
    RecipeCreate,
    RecipeData,
    RecipeListOptions,
    RecipePage,
    RecipeRepository,
    RecipeUpdate,
)
from recipe_catalog.database.repositories.stats import CatalogStatsData, StatsRepository


__all__ = [
    "CatalogStatsData",
    "CategoryCreate",
    "CategoryData",
    "CategoryListOptions",
    "CategoryPage",
    "CategoryRepository",
    "CategoryUpdate",
    "RecipeCreate",
    "RecipeData",
    "RecipeListOptions",
    "RecipePage",
    "RecipeRepository",
    "RecipeUpdate",
    "StatsRepository",
]
