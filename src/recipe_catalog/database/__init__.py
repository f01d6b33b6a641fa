"""PostgreSQL database layer.

This module provides:
- Connection pool management
- Repository classes for recipes, categories and statistics
- Schema creation and sample data
"""

from recipe_catalog.database.connection import (
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)
from recipe_catalog.database.repositories import (
    CategoryRepository,
    RecipeRepository,
    StatsRepository,
)
from recipe_catalog.database.schema import create_schema


__all__ = [
    "CategoryRepository",
    "RecipeRepository",
    "StatsRepository",
    "check_database_health",
    "close_database_pool",
    "create_schema",
    "get_database_pool",
    "init_database_pool",
]
