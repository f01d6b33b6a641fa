"""FastAPI dependencies for service access.

Services and repositories are built during application startup and stored in
``app.state``; these dependencies fetch them for route handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from recipe_catalog.core.exceptions import ServiceUnavailableException


if TYPE_CHECKING:
    from recipe_catalog.database.repositories.stats import StatsRepository
    from recipe_catalog.services.categories.service import CategoryService
    from recipe_catalog.services.recipes.service import RecipeService


async def get_recipe_service(request: Request) -> RecipeService:
    """Get the recipe service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    service: RecipeService | None = getattr(request.app.state, "recipe_service", None)
    if service is None:
        raise ServiceUnavailableException("Recipe service not available")
    return service


async def get_category_service(request: Request) -> CategoryService:
    """Get the category service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    service: CategoryService | None = getattr(request.app.state, "category_service", None)
    if service is None:
        raise ServiceUnavailableException("Category service not available")
    return service


async def get_stats_repository(request: Request) -> StatsRepository:
    """Get the statistics repository from app state."""
    repository: StatsRepository | None = getattr(request.app.state, "stats_repository", None)
    if repository is None:
        raise ServiceUnavailableException("Statistics not available")
    return repository
