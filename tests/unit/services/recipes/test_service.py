"""Unit tests for RecipeService."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from recipe_catalog.database.exceptions import UnknownCategoryError
from recipe_catalog.database.query import build_pagination
from recipe_catalog.database.repositories.recipe import (
    RecipeCreate,
    RecipeListOptions,
    RecipePage,
    RecipeUpdate,
)
from recipe_catalog.services.recipes.exceptions import (
    RecipeNotDeletedError,
    RecipeNotFoundError,
)
from recipe_catalog.services.recipes.service import RecipeService
from tests.factories import RecipeDataFactory


pytestmark = pytest.mark.unit


@pytest.fixture
def repository() -> MagicMock:
    """Recipe repository with async methods mocked."""
    repo = MagicMock()
    methods = ("list", "get", "create", "update", "delete", "restore", "hard_delete", "list_deleted")
    for name in methods:
        setattr(repo, name, AsyncMock())
    return repo


@pytest.fixture
def service(repository: MagicMock) -> RecipeService:
    """RecipeService wired to the mocked repository."""
    return RecipeService(repository)


def _create_data(**overrides: object) -> RecipeCreate:
    fields: dict[str, object] = {
        "title": "Pancakes",
        "ingredients": "250g flour, 2 eggs, 500ml milk",
        "instructions": "Whisk everything, rest the batter, then fry.",
        "prep_time": 10,
        "cook_time": 15,
        "servings": 4,
    }
    fields.update(overrides)
    return RecipeCreate.model_validate(fields)


class TestRead:
    """Tests for list_recipes, get_recipe and list_deleted_recipes."""

    async def test_list_passes_options_through(
        self, service: RecipeService, repository: MagicMock
    ) -> None:
        """Should delegate listing to the repository."""
        page = RecipePage(
            recipes=[RecipeDataFactory.build(id=1)],
            pagination=build_pagination(total=1, limit=10, offset=0, returned=1),
        )
        repository.list.return_value = page
        options = RecipeListOptions(search="soup")

        assert await service.list_recipes(options) is page
        repository.list.assert_awaited_once_with(options)

    async def test_get_returns_recipe(self, service: RecipeService, repository: MagicMock) -> None:
        """Should return the active recipe."""
        recipe = RecipeDataFactory.build(id=3)
        repository.get.return_value = recipe

        assert await service.get_recipe(3) is recipe

    async def test_get_missing_raises(self, service: RecipeService, repository: MagicMock) -> None:
        """Should raise RecipeNotFoundError for absent or deleted recipes."""
        repository.get.return_value = None

        with pytest.raises(RecipeNotFoundError) as exc_info:
            await service.get_recipe(3)

        assert exc_info.value.recipe_id == 3

    async def test_list_deleted(self, service: RecipeService, repository: MagicMock) -> None:
        """Should return the repository's deleted recipes."""
        deleted = [RecipeDataFactory.deleted(id=5)]
        repository.list_deleted.return_value = deleted

        assert await service.list_deleted_recipes() == deleted


class TestCreate:
    """Tests for create_recipe."""

    async def test_returns_created_recipe(
        self, service: RecipeService, repository: MagicMock
    ) -> None:
        """Should return the recipe as stored."""
        stored = RecipeDataFactory.build(id=8)
        repository.create.return_value = stored
        data = _create_data()

        assert await service.create_recipe(data) is stored
        repository.create.assert_awaited_once_with(data)

    async def test_unknown_category_propagates(
        self, service: RecipeService, repository: MagicMock
    ) -> None:
        """Should let UnknownCategoryError reach the caller."""
        repository.create.side_effect = UnknownCategoryError(99)

        with pytest.raises(UnknownCategoryError):
            await service.create_recipe(_create_data(category_id=99))

    async def test_unreadable_row_raises(
        self, service: RecipeService, repository: MagicMock
    ) -> None:
        """Should fail loudly if the insert cannot be read back."""
        repository.create.return_value = None

        with pytest.raises(RuntimeError):
            await service.create_recipe(_create_data())


class TestUpdate:
    """Tests for update_recipe."""

    async def test_updates_active_recipe(
        self, service: RecipeService, repository: MagicMock
    ) -> None:
        """Should check existence then write the patch."""
        repository.get.return_value = RecipeDataFactory.build(id=2)
        updated = RecipeDataFactory.build(id=2, servings=6)
        repository.update.return_value = updated
        patch = RecipeUpdate(servings=6)

        assert await service.update_recipe(2, patch) is updated
        repository.update.assert_awaited_once_with(2, patch)

    async def test_missing_recipe_is_not_written(
        self, service: RecipeService, repository: MagicMock
    ) -> None:
        """Should raise before writing when the recipe is absent."""
        repository.get.return_value = None

        with pytest.raises(RecipeNotFoundError):
            await service.update_recipe(2, RecipeUpdate(servings=6))

        repository.update.assert_not_called()

    async def test_deleted_meanwhile(self, service: RecipeService, repository: MagicMock) -> None:
        """Should raise when the row disappears during the update."""
        repository.get.return_value = RecipeDataFactory.build(id=2)
        repository.update.return_value = None

        with pytest.raises(RecipeNotFoundError):
            await service.update_recipe(2, RecipeUpdate(title="Crepes"))


class TestDelete:
    """Tests for delete_recipe and hard_delete_recipe."""

    async def test_soft_delete(self, service: RecipeService, repository: MagicMock) -> None:
        """Should succeed when a row was marked deleted."""
        repository.delete.return_value = True

        await service.delete_recipe(4)

        repository.delete.assert_awaited_once_with(4)

    async def test_second_delete_raises(
        self, service: RecipeService, repository: MagicMock
    ) -> None:
        """Should raise when nothing active was deleted."""
        repository.delete.return_value = False

        with pytest.raises(RecipeNotFoundError):
            await service.delete_recipe(4)

    async def test_hard_delete(self, service: RecipeService, repository: MagicMock) -> None:
        """Should remove the row permanently."""
        repository.hard_delete.return_value = True

        await service.hard_delete_recipe(4)

        repository.hard_delete.assert_awaited_once_with(4)

    async def test_hard_delete_missing(
        self, service: RecipeService, repository: MagicMock
    ) -> None:
        """Should raise when no row was removed."""
        repository.hard_delete.return_value = False

        with pytest.raises(RecipeNotFoundError):
            await service.hard_delete_recipe(4)


class TestRestore:
    """Tests for restore_recipe."""

    async def test_restores_deleted_recipe(
        self, service: RecipeService, repository: MagicMock
    ) -> None:
        """Should restore a soft-deleted recipe."""
        repository.get.return_value = RecipeDataFactory.deleted(id=7)
        restored = RecipeDataFactory.build(id=7)
        repository.restore.return_value = restored

        assert await service.restore_recipe(7) is restored
        repository.get.assert_awaited_once_with(7, include_deleted=True)

    async def test_missing_recipe(self, service: RecipeService, repository: MagicMock) -> None:
        """Should raise RecipeNotFoundError when the recipe never existed."""
        repository.get.return_value = None

        with pytest.raises(RecipeNotFoundError):
            await service.restore_recipe(7)

    async def test_active_recipe_is_rejected(
        self, service: RecipeService, repository: MagicMock
    ) -> None:
        """Should refuse to restore an active recipe."""
        repository.get.return_value = RecipeDataFactory.build(id=7)

        with pytest.raises(RecipeNotDeletedError):
            await service.restore_recipe(7)

        repository.restore.assert_not_called()
