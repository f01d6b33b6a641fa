"""Category service."""

from __future__ import annotations

from recipe_catalog.database.exceptions import DuplicateCategoryNameError
from recipe_catalog.database.repositories.category import (
    CategoryCreate,
    CategoryData,
    CategoryListOptions,
    CategoryPage,
    CategoryRepository,
    CategoryUpdate,
)
from recipe_catalog.database.repositories.recipe import RecipeData
from recipe_catalog.observability.logging import get_logger
from recipe_catalog.services.categories.exceptions import (
    CategoryNotDeletedError,
    CategoryNotFoundError,
)


logger = get_logger(__name__)


class CategoryService:
    """Application-level operations on categories.

    Name uniqueness is checked here before writing; the partial unique index
    in the database catches anything that slips between check and write.
    """

    def __init__(self, repository: CategoryRepository | None = None) -> None:
        self._repository = repository or CategoryRepository()

    async def list_categories(self, options: CategoryListOptions | None = None) -> CategoryPage:
        return await self._repository.list(options)

    async def get_category(self, category_id: int) -> CategoryData:
        """Get an active category.

        Raises:
            CategoryNotFoundError: If the category is absent or soft-deleted.
        """
        category = await self._repository.get(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    async def get_category_recipes(self, category_id: int) -> list[RecipeData]:
        """Active recipes of an active category, newest first."""
        await self.get_category(category_id)
        return await self._repository.recipes_of(category_id)

    async def create_category(self, data: CategoryCreate) -> CategoryData:
        """Create a category.

        Raises:
            DuplicateCategoryNameError: If an active category has this name.
        """
        if await self._repository.exists_by_name(data.name):
            raise DuplicateCategoryNameError(data.name)

        category = await self._repository.create(data)
        if category is None:
            msg = "Created category could not be read back"
            raise RuntimeError(msg)

        logger.info("Category created", category_id=category.id, name=category.name)
        return category

    async def update_category(self, category_id: int, patch: CategoryUpdate) -> CategoryData:
        """Apply a partial update to an active category.

        Raises:
            CategoryNotFoundError: If the category is absent or soft-deleted.
            DuplicateCategoryNameError: If another active category has the new name.
        """
        await self.get_category(category_id)

        if patch.name is not None and await self._repository.exists_by_name(
            patch.name, exclude_id=category_id
        ):
            raise DuplicateCategoryNameError(patch.name)

        category = await self._repository.update(category_id, patch)
        if category is None:
            raise CategoryNotFoundError(category_id)

        logger.info(
            "Category updated",
            category_id=category_id,
            fields=sorted(patch.model_fields_set),
        )
        return category

    async def delete_category(self, category_id: int) -> None:
        """Soft-delete a category without active recipes.

        Raises:
            CategoryNotFoundError: If there is no active category with this id.
            CategoryInUseError: If active recipes still reference it.
        """
        if not await self._repository.delete(category_id):
            raise CategoryNotFoundError(category_id)
        logger.info("Category deleted", category_id=category_id)

    async def restore_category(self, category_id: int) -> CategoryData:
        """Bring a soft-deleted category back.

        Raises:
            CategoryNotFoundError: If the category does not exist at all.
            CategoryNotDeletedError: If the category is active.
            DuplicateCategoryNameError: If an active category now has its name.
        """
        existing = await self._repository.get(category_id, include_deleted=True)
        if existing is None:
            raise CategoryNotFoundError(category_id)
        if not existing.is_deleted:
            raise CategoryNotDeletedError(category_id)

        category = await self._repository.restore(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)

        logger.info("Category restored", category_id=category_id)
        return category
