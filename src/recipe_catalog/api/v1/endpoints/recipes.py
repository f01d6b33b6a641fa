"""Recipe endpoints.

Provides:
- GET /recipes for filtered, sorted, paginated listing
- GET /recipes/deleted for the recycle bin
- GET, PATCH, DELETE /recipes/{recipe_id}
- POST /recipes for creation
- POST /recipes/{recipe_id}/restore and DELETE /recipes/{recipe_id}/permanent
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from recipe_catalog.api.dependencies import get_recipe_service
from recipe_catalog.core.exceptions import ConflictException, NotFoundException
from recipe_catalog.database.exceptions import UnknownCategoryError
from recipe_catalog.database.repositories.recipe import RecipeListOptions
from recipe_catalog.observability.logging import get_logger
from recipe_catalog.schemas.enums import Difficulty, SortOrder
from recipe_catalog.schemas.recipe import (
    CreateRecipeRequest,
    RecipeListResponse,
    RecipeResponse,
    UpdateRecipeRequest,
)
from recipe_catalog.services.recipes.exceptions import (
    RecipeNotDeletedError,
    RecipeNotFoundError,
)
from recipe_catalog.services.recipes.service import RecipeService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"])

RecipeId = Annotated[int, Path(ge=1, description="Recipe identifier")]
Service = Annotated[RecipeService, Depends(get_recipe_service)]

_NOT_FOUND = {404: {"description": "Recipe not found"}}


@router.get(
    "",
    response_model=RecipeListResponse,
    summary="List recipes",
    description=(
        "Returns a page of recipes matching every given filter. Unknown sort "
        "fields fall back to creation time."
    ),
)
async def list_recipes(
    service: Service,
    limit: Annotated[int, Query(ge=1, le=100, description="Page size")] = 10,
    offset: Annotated[int, Query(ge=0, description="Rows to skip")] = 0,
    search: Annotated[
        str | None,
        Query(
            min_length=2,
            max_length=100,
            description="Case-insensitive text in title, description or ingredients",
        ),
    ] = None,
    difficulty: Annotated[Difficulty | None, Query(description="Exact difficulty")] = None,
    category_id: Annotated[
        int | None,
        Query(ge=1, description="Exact category"),
    ] = None,
    sort: Annotated[
        str,
        Query(description="title, prep_time, cook_time, created_at, servings or total_time"),
    ] = "created_at",
    order: Annotated[SortOrder, Query(description="Sort direction")] = SortOrder.DESC,
    include_deleted: Annotated[
        bool,
        Query(description="Include soft-deleted recipes"),
    ] = False,
) -> RecipeListResponse:
    """List recipes with filters and pagination."""
    options = RecipeListOptions(
        limit=limit,
        offset=offset,
        search=search.strip() if search else None,
        difficulty=difficulty,
        category_id=category_id,
        sort=sort,
        order=order.value,
        include_deleted=include_deleted,
    )
    page = await service.list_recipes(options)
    return RecipeListResponse.from_page(page)


@router.get(
    "/deleted",
    response_model=list[RecipeResponse],
    summary="List deleted recipes",
    description="Soft-deleted recipes, most recently deleted first.",
)
async def list_deleted_recipes(service: Service) -> list[RecipeResponse]:
    recipes = await service.list_deleted_recipes()
    return [RecipeResponse.from_data(recipe) for recipe in recipes]


@router.get(
    "/{recipe_id}",
    response_model=RecipeResponse,
    summary="Get a recipe",
    responses=_NOT_FOUND,
)
async def get_recipe(recipe_id: RecipeId, service: Service) -> RecipeResponse:
    try:
        recipe = await service.get_recipe(recipe_id)
    except RecipeNotFoundError:
        raise NotFoundException("Recipe", recipe_id) from None
    return RecipeResponse.from_data(recipe)


@router.post(
    "",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
    responses={409: {"description": "Unknown category"}},
)
async def create_recipe(body: CreateRecipeRequest, service: Service) -> RecipeResponse:
    """Create a recipe; difficulty defaults to medium."""
    try:
        recipe = await service.create_recipe(body.to_create())
    except UnknownCategoryError as e:
        logger.warning("Recipe references unknown category", category_id=e.category_id)
        raise ConflictException(str(e)) from None
    return RecipeResponse.from_data(recipe)


@router.patch(
    "/{recipe_id}",
    response_model=RecipeResponse,
    summary="Update a recipe",
    description="Only the fields present in the body are changed.",
    responses={**_NOT_FOUND, 409: {"description": "Unknown category"}},
)
async def update_recipe(
    recipe_id: RecipeId,
    body: UpdateRecipeRequest,
    service: Service,
) -> RecipeResponse:
    try:
        recipe = await service.update_recipe(recipe_id, body.to_update())
    except RecipeNotFoundError:
        raise NotFoundException("Recipe", recipe_id) from None
    except UnknownCategoryError as e:
        logger.warning("Recipe references unknown category", category_id=e.category_id)
        raise ConflictException(str(e)) from None
    return RecipeResponse.from_data(recipe)


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft-delete a recipe",
    responses=_NOT_FOUND,
)
async def delete_recipe(recipe_id: RecipeId, service: Service) -> Response:
    try:
        await service.delete_recipe(recipe_id)
    except RecipeNotFoundError:
        raise NotFoundException("Recipe", recipe_id) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{recipe_id}/restore",
    response_model=RecipeResponse,
    summary="Restore a deleted recipe",
    responses={**_NOT_FOUND, 409: {"description": "Recipe is not deleted"}},
)
async def restore_recipe(recipe_id: RecipeId, service: Service) -> RecipeResponse:
    try:
        recipe = await service.restore_recipe(recipe_id)
    except RecipeNotFoundError:
        raise NotFoundException("Recipe", recipe_id) from None
    except RecipeNotDeletedError as e:
        raise ConflictException(str(e)) from None
    return RecipeResponse.from_data(recipe)


@router.delete(
    "/{recipe_id}/permanent",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Permanently delete a recipe",
    description="Removes the recipe for good, whether or not it was soft-deleted.",
    responses=_NOT_FOUND,
)
async def hard_delete_recipe(recipe_id: RecipeId, service: Service) -> Response:
    try:
        await service.hard_delete_recipe(recipe_id)
    except RecipeNotFoundError:
        raise NotFoundException("Recipe", recipe_id) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
