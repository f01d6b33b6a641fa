"""Category request and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Self

from pydantic import Field, StringConstraints, model_validator

from recipe_catalog.database.repositories.category import (
    CategoryCreate,
    CategoryData,
    CategoryPage,
    CategoryUpdate,
)
from recipe_catalog.schemas.base import APIRequest, APIResponse
from recipe_catalog.schemas.pagination import PaginationResponse


CategoryName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
CategoryDescription = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


class CreateCategoryRequest(APIRequest):
    """Body of ``POST /categories``."""

    name: CategoryName = Field(..., description="Unique category name")
    description: CategoryDescription | None = Field(default=None, description="Description")

    def to_create(self) -> CategoryCreate:
        return CategoryCreate.model_validate(self.model_dump(by_alias=False))


class UpdateCategoryRequest(APIRequest):
    """Body of ``PATCH /categories/{id}``; ``description`` may be null."""

    name: CategoryName | None = None
    description: CategoryDescription | None = None

    @model_validator(mode="after")
    def _reject_null_name(self) -> Self:
        if "name" in self.model_fields_set and self.name is None:
            msg = "Field cannot be null: name"
            raise ValueError(msg)
        return self

    def to_update(self) -> CategoryUpdate:
        return CategoryUpdate.model_validate(self.model_dump(by_alias=False, exclude_unset=True))


class CategoryResponse(APIResponse):
    """A single category with its active recipe count."""

    id: int
    name: str
    description: str | None = None
    recipe_count: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @classmethod
    def from_data(cls, data: CategoryData) -> CategoryResponse:
        return cls.model_validate(data.model_dump())


class CategoryListResponse(APIResponse):
    """A page of categories."""

    categories: list[CategoryResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: CategoryPage) -> CategoryListResponse:
        return cls(
            categories=[CategoryResponse.from_data(category) for category in page.categories],
            pagination=PaginationResponse.model_validate(page.pagination.model_dump()),
        )
