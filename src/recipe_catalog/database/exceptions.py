"""Exceptions raised by the catalog repositories.

Storage failures (asyncpg errors) are not wrapped; only constraint outcomes that
carry domain meaning are translated into the conflict types below.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for repository errors."""


class RepositoryConflictError(RepositoryError):
    """A write was refused because it would break a catalog invariant."""


class DuplicateCategoryNameError(RepositoryConflictError):
    """An active category already uses this name."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        if name is None:
            message = "An active category with this name already exists"
        else:
            message = f"An active category named '{name}' already exists"
        super().__init__(message)


class CategoryInUseError(RepositoryConflictError):
    """The category still has active recipes and cannot be deleted."""

    def __init__(self, category_id: int, recipe_count: int) -> None:
        self.category_id = category_id
        self.recipe_count = recipe_count
        super().__init__(
            f"Category {category_id} cannot be deleted: "
            f"{recipe_count} active recipe(s) still reference it"
        )


class UnknownCategoryError(RepositoryConflictError):
    """A recipe references a category id that does not exist."""

    def __init__(self, category_id: int | None) -> None:
        self.category_id = category_id
        super().__init__(f"Category {category_id} does not exist")
