"""Recipe request and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Self

from pydantic import Field, StringConstraints, model_validator

from recipe_catalog.database.repositories.recipe import (
    RecipeCreate,
    RecipeData,
    RecipePage,
    RecipeUpdate,
)
from recipe_catalog.schemas.base import APIRequest, APIResponse
from recipe_catalog.schemas.enums import Difficulty
from recipe_catalog.schemas.pagination import PaginationResponse


MAX_MINUTES = 1440

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=200)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]
Ingredients = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]
Instructions = Annotated[str, StringConstraints(strip_whitespace=True, min_length=20)]
Minutes = Annotated[int, Field(ge=0, le=MAX_MINUTES)]
Servings = Annotated[int, Field(ge=1, le=100)]
CategoryId = Annotated[int, Field(ge=1)]

# Columns that cannot hold NULL; an explicit null in a patch is rejected.
_NOT_NULL_FIELDS = (
    "title",
    "ingredients",
    "instructions",
    "prep_time",
    "cook_time",
    "servings",
    "difficulty",
)


# =============================================================================
# Requests
# =============================================================================


class CreateRecipeRequest(APIRequest):
    """Body of ``POST /recipes``."""

    title: Title = Field(..., description="Recipe title")
    description: Description | None = Field(default=None, description="Short description")
    ingredients: Ingredients = Field(..., description="Ingredient list as free text")
    instructions: Instructions = Field(..., description="Preparation steps as free text")
    prep_time: Minutes = Field(..., description="Preparation time in minutes")
    cook_time: Minutes = Field(..., description="Cooking time in minutes")
    servings: Servings = Field(..., description="Number of servings")
    difficulty: Difficulty | None = Field(
        default=None,
        description="Difficulty level; medium when omitted",
    )
    category_id: CategoryId | None = Field(default=None, description="Category of the recipe")

    @model_validator(mode="after")
    def _check_total_time(self) -> Self:
        if self.prep_time + self.cook_time < 1:
            msg = "Total time (prep_time + cook_time) must be at least 1 minute"
            raise ValueError(msg)
        return self

    def to_create(self) -> RecipeCreate:
        return RecipeCreate.model_validate(self.model_dump(by_alias=False))


class UpdateRecipeRequest(APIRequest):
    """Body of ``PATCH /recipes/{id}``.

    Omitted fields are left untouched. ``description`` and ``categoryId`` may
    be set to null to clear them.
    """

    title: Title | None = None
    description: Description | None = None
    ingredients: Ingredients | None = None
    instructions: Instructions | None = None
    prep_time: Minutes | None = None
    cook_time: Minutes | None = None
    servings: Servings | None = None
    difficulty: Difficulty | None = None
    category_id: CategoryId | None = None

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> Self:
        nulled = [
            name
            for name in _NOT_NULL_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            msg = f"Fields cannot be null: {', '.join(nulled)}"
            raise ValueError(msg)
        return self

    def to_update(self) -> RecipeUpdate:
        """Convert to a repository patch, keeping only the fields sent."""
        return RecipeUpdate.model_validate(self.model_dump(by_alias=False, exclude_unset=True))


# =============================================================================
# Responses
# =============================================================================


class RecipeResponse(APIResponse):
    """A single recipe."""

    id: int
    title: str
    description: str | None = None
    ingredients: str
    instructions: str
    prep_time: int
    cook_time: int
    servings: int
    difficulty: Difficulty
    category_id: int | None = None
    category_name: str | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @classmethod
    def from_data(cls, data: RecipeData) -> RecipeResponse:
        return cls.model_validate(data.model_dump())


class RecipeListResponse(APIResponse):
    """A page of recipes."""

    recipes: list[RecipeResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: RecipePage) -> RecipeListResponse:
        return cls(
            recipes=[RecipeResponse.from_data(recipe) for recipe in page.recipes],
            pagination=PaginationResponse.model_validate(page.pagination.model_dump()),
        )
