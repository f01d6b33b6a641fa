"""Catalog factories for generating test data.

Uses polyfactory for consistent test data generation.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from polyfactory.factories.pydantic_factory import ModelFactory

from recipe_catalog.database.repositories.category import CategoryData
from recipe_catalog.database.repositories.recipe import RecipeData
from recipe_catalog.schemas.enums import Difficulty


CREATED_AT = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
DELETED_AT = datetime(2024, 3, 2, 8, 30, tzinfo=UTC)


class RecipeDataFactory(ModelFactory[RecipeData]):
    """Factory for generating active RecipeData instances."""

    __model__ = RecipeData

    title = "Pancakes"
    description = "Thin pancakes"
    ingredients = "250g flour, 2 eggs, 500ml milk"
    instructions = "Whisk everything, rest the batter, then fry."
    prep_time = 10
    cook_time = 15
    servings = 4
    difficulty = Difficulty.EASY
    category_id = None
    category_name = None
    created_at = CREATED_AT
    updated_at = CREATED_AT
    deleted_at = None

    @classmethod
    def deleted(cls, **kwargs: Any) -> RecipeData:
        """Create a soft-deleted recipe."""
        return cls.build(deleted_at=DELETED_AT, **kwargs)


class CategoryDataFactory(ModelFactory[CategoryData]):
    """Factory for generating active CategoryData instances."""

    __model__ = CategoryData

    name = "Desserts"
    description = "Sweet things"
    recipe_count = 0
    created_at = CREATED_AT
    updated_at = CREATED_AT
    deleted_at = None

    @classmethod
    def deleted(cls, **kwargs: Any) -> CategoryData:
        """Create a soft-deleted category."""
        return cls.build(deleted_at=DELETED_AT, **kwargs)


def recipe_row(**overrides: Any) -> dict[str, Any]:
    """A row as returned by the recipe SELECT (``r.*`` plus ``category_name``)."""
    row: dict[str, Any] = {
        "id": 1,
        "title": "Pancakes",
        "description": "Thin pancakes",
        "ingredients": "250g flour, 2 eggs, 500ml milk",
        "instructions": "Whisk everything, rest the batter, then fry.",
        "prep_time": 10,
        "cook_time": 15,
        "servings": 4,
        "difficulty": "easy",
        "category_id": None,
        "category_name": None,
        "created_at": CREATED_AT,
        "updated_at": CREATED_AT,
        "deleted_at": None,
    }
    row.update(overrides)
    return row


def category_row(**overrides: Any) -> dict[str, Any]:
    """A row as returned by the category SELECT (``c.*`` plus ``recipe_count``)."""
    row: dict[str, Any] = {
        "id": 1,
        "name": "Desserts",
        "description": "Sweet things",
        "recipe_count": 0,
        "created_at": CREATED_AT,
        "updated_at": CREATED_AT,
        "deleted_at": None,
    }
    row.update(overrides)
    return row
