"""Test data factories."""

from tests.factories.catalog import (
    CategoryDataFactory,
    RecipeDataFactory,
    category_row,
    recipe_row,
)


__all__ = [
    "CategoryDataFactory",
    "RecipeDataFactory",
    "category_row",
    "recipe_row",
]
