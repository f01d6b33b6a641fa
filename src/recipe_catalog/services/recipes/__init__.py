"""Recipe service package.

Lifecycle rules (not-found, restore-only-when-deleted) on top of the recipe
repository.
"""

from recipe_catalog.services.recipes.exceptions import (
    RecipeNotDeletedError,
    RecipeNotFoundError,
    RecipeServiceError,
)
from recipe_catalog.services.recipes.service import RecipeService


__all__ = [
    "RecipeNotDeletedError",
    "RecipeNotFoundError",
    "RecipeService",
    "RecipeServiceError",
]
