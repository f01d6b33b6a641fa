"""Recipe service exceptions."""

from __future__ import annotations


class RecipeServiceError(Exception):
    """Base exception for recipe service errors."""


class RecipeNotFoundError(RecipeServiceError):
    """Raised when a recipe does not exist (or is deleted, where that matters)."""

    def __init__(self, recipe_id: int) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Recipe {recipe_id} not found")


class RecipeNotDeletedError(RecipeServiceError):
    """Raised when restoring a recipe that is still active."""

    def __init__(self, recipe_id: int) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Recipe {recipe_id} is not deleted")
