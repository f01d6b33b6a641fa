"""Recipe service.

Wraps ``RecipeRepository`` with the lifecycle rules the repository leaves to
its callers: missing records become ``RecipeNotFoundError``, and only deleted
recipes can be restored.
"""

from __future__ import annotations

from recipe_catalog.database.repositories.recipe import (
    RecipeCreate,
    RecipeData,
    RecipeListOptions,
    RecipePage,
    RecipeRepository,
    RecipeUpdate,
)
from recipe_catalog.observability.logging import get_logger
from recipe_catalog.services.recipes.exceptions import (
    RecipeNotDeletedError,
    RecipeNotFoundError,
)


logger = get_logger(__name__)


class RecipeService:
    """Application-level operations on recipes."""

    def __init__(self, repository: RecipeRepository | None = None) -> None:
        """Initialize the recipe service.

        Args:
            repository: Recipe repository. Defaults to one on the global pool.
        """
        self._repository = repository or RecipeRepository()

    async def list_recipes(self, options: RecipeListOptions | None = None) -> RecipePage:
        return await self._repository.list(options)

    async def get_recipe(self, recipe_id: int) -> RecipeData:
        """Get an active recipe.

        Raises:
            RecipeNotFoundError: If the recipe is absent or soft-deleted.
        """
        recipe = await self._repository.get(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        return recipe

    async def create_recipe(self, data: RecipeCreate) -> RecipeData:
        """Create a recipe.

        Raises:
            UnknownCategoryError: If ``category_id`` references no category.
        """
        recipe = await self._repository.create(data)
        if recipe is None:
            msg = "Created recipe could not be read back"
            raise RuntimeError(msg)
        logger.info("Recipe created", recipe_id=recipe.id, title=recipe.title)
        return recipe

    async def update_recipe(self, recipe_id: int, patch: RecipeUpdate) -> RecipeData:
        """Apply a partial update to an active recipe.

        Raises:
            RecipeNotFoundError: If the recipe is absent or soft-deleted.
            UnknownCategoryError: If the new ``category_id`` does not exist.
        """
        await self.get_recipe(recipe_id)

        recipe = await self._repository.update(recipe_id, patch)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)

        logger.info(
            "Recipe updated",
            recipe_id=recipe_id,
            fields=sorted(patch.model_fields_set),
        )
        return recipe

    async def delete_recipe(self, recipe_id: int) -> None:
        """Soft-delete an active recipe.

        Raises:
            RecipeNotFoundError: If there is no active recipe with this id.
        """
        if not await self._repository.delete(recipe_id):
            raise RecipeNotFoundError(recipe_id)
        logger.info("Recipe deleted", recipe_id=recipe_id)

    async def restore_recipe(self, recipe_id: int) -> RecipeData:
        """Bring a soft-deleted recipe back.

        Raises:
            RecipeNotFoundError: If the recipe does not exist at all.
            RecipeNotDeletedError: If the recipe is active.
        """
        existing = await self._repository.get(recipe_id, include_deleted=True)
        if existing is None:
            raise RecipeNotFoundError(recipe_id)
        if not existing.is_deleted:
            raise RecipeNotDeletedError(recipe_id)

        recipe = await self._repository.restore(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)

        logger.info("Recipe restored", recipe_id=recipe_id)
        return recipe

    async def hard_delete_recipe(self, recipe_id: int) -> None:
        """Remove a recipe permanently, whether or not it is soft-deleted.

        Raises:
            RecipeNotFoundError: If no row was removed.
        """
        if not await self._repository.hard_delete(recipe_id):
            raise RecipeNotFoundError(recipe_id)
        logger.warning("Recipe permanently deleted", recipe_id=recipe_id)

    async def list_deleted_recipes(self) -> list[RecipeData]:
        return await self._repository.list_deleted()
