"""Category endpoints.

Provides:
- GET /categories for paginated listing with recipe counts
- GET, PATCH, DELETE /categories/{category_id}
- GET /categories/{category_id}/recipes for the recipes in a category
- POST /categories for creation
- POST /categories/{category_id}/restore
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from recipe_catalog.api.dependencies import get_category_service
from recipe_catalog.core.exceptions import ConflictException, NotFoundException
from recipe_catalog.database.exceptions import CategoryInUseError, DuplicateCategoryNameError
from recipe_catalog.database.repositories.category import CategoryListOptions
from recipe_catalog.observability.logging import get_logger
from recipe_catalog.schemas.category import (
    CategoryListResponse,
    CategoryResponse,
    CreateCategoryRequest,
    UpdateCategoryRequest,
)
from recipe_catalog.schemas.recipe import RecipeResponse
from recipe_catalog.services.categories.exceptions import (
    CategoryNotDeletedError,
    CategoryNotFoundError,
)
from recipe_catalog.services.categories.service import CategoryService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(prefix="/categories", tags=["Categories"])

CategoryId = Annotated[int, Path(ge=1, description="Category identifier")]
Service = Annotated[CategoryService, Depends(get_category_service)]

_NOT_FOUND = {404: {"description": "Category not found"}}
_DUPLICATE = {409: {"description": "Another active category has this name"}}


@router.get(
    "",
    response_model=CategoryListResponse,
    summary="List categories",
    description="Categories ordered by name, each with its number of active recipes.",
)
async def list_categories(
    service: Service,
    limit: Annotated[int, Query(ge=1, le=100, description="Page size")] = 50,
    offset: Annotated[int, Query(ge=0, description="Rows to skip")] = 0,
    search: Annotated[
        str | None,
        Query(min_length=2, max_length=100, description="Text in name or description"),
    ] = None,
    include_deleted: Annotated[
        bool,
        Query(description="Include soft-deleted categories"),
    ] = False,
) -> CategoryListResponse:
    options = CategoryListOptions(
        limit=limit,
        offset=offset,
        search=search.strip() if search else None,
        include_deleted=include_deleted,
    )
    page = await service.list_categories(options)
    return CategoryListResponse.from_page(page)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Get a category",
    responses=_NOT_FOUND,
)
async def get_category(category_id: CategoryId, service: Service) -> CategoryResponse:
    try:
        category = await service.get_category(category_id)
    except CategoryNotFoundError:
        raise NotFoundException("Category", category_id) from None
    return CategoryResponse.from_data(category)


@router.get(
    "/{category_id}/recipes",
    response_model=list[RecipeResponse],
    summary="List the recipes of a category",
    description="Active recipes in the category, newest first.",
    responses=_NOT_FOUND,
)
async def get_category_recipes(
    category_id: CategoryId,
    service: Service,
) -> list[RecipeResponse]:
    try:
        recipes = await service.get_category_recipes(category_id)
    except CategoryNotFoundError:
        raise NotFoundException("Category", category_id) from None
    return [RecipeResponse.from_data(recipe) for recipe in recipes]


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
    responses=_DUPLICATE,
)
async def create_category(body: CreateCategoryRequest, service: Service) -> CategoryResponse:
    try:
        category = await service.create_category(body.to_create())
    except DuplicateCategoryNameError as e:
        logger.info("Duplicate category name rejected", name=e.name)
        raise ConflictException(str(e)) from None
    return CategoryResponse.from_data(category)


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update a category",
    description="Only the fields present in the body are changed.",
    responses={**_NOT_FOUND, **_DUPLICATE},
)
async def update_category(
    category_id: CategoryId,
    body: UpdateCategoryRequest,
    service: Service,
) -> CategoryResponse:
    try:
        category = await service.update_category(category_id, body.to_update())
    except CategoryNotFoundError:
        raise NotFoundException("Category", category_id) from None
    except DuplicateCategoryNameError as e:
        logger.info("Duplicate category name rejected", name=e.name)
        raise ConflictException(str(e)) from None
    return CategoryResponse.from_data(category)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft-delete a category",
    description="Refused while active recipes still belong to the category.",
    responses={**_NOT_FOUND, 409: {"description": "Category still has active recipes"}},
)
async def delete_category(category_id: CategoryId, service: Service) -> Response:
    try:
        await service.delete_category(category_id)
    except CategoryNotFoundError:
        raise NotFoundException("Category", category_id) from None
    except CategoryInUseError as e:
        logger.info(
            "Category delete refused",
            category_id=category_id,
            recipe_count=e.recipe_count,
        )
        raise ConflictException(str(e)) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{category_id}/restore",
    response_model=CategoryResponse,
    summary="Restore a deleted category",
    responses={**_NOT_FOUND, 409: {"description": "Not deleted, or its name is taken"}},
)
async def restore_category(category_id: CategoryId, service: Service) -> CategoryResponse:
    try:
        category = await service.restore_category(category_id)
    except CategoryNotFoundError:
        raise NotFoundException("Category", category_id) from None
    except (CategoryNotDeletedError, DuplicateCategoryNameError) as e:
        raise ConflictException(str(e)) from None
    return CategoryResponse.from_data(category)
