"""Startup and shutdown of the application.

On startup logging is configured, the database pool is opened and the
services are placed on ``app.state`` where ``api.dependencies`` finds them.
On shutdown they are removed and the pool is closed.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_catalog.core.config import Settings, get_settings
from recipe_catalog.database.connection import close_database_pool, init_database_pool
from recipe_catalog.database.repositories import (
    CategoryRepository,
    RecipeRepository,
    StatsRepository,
)
from recipe_catalog.observability.logging import get_logger, setup_logging
from recipe_catalog.services.categories.service import CategoryService
from recipe_catalog.services.recipes.service import RecipeService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)

_STATE_ATTRIBUTES = ("recipe_service", "category_service", "stats_repository")


async def _startup(app: FastAPI, settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )
    logger.info(
        "Starting recipe catalog",
        app_name=settings.app.name,
        version=settings.app.version,
        environment=settings.APP_ENV,
    )

    # No degraded mode: a failed pool aborts startup.
    pool = await init_database_pool()

    app.state.recipe_service = RecipeService(
        RecipeRepository(pool, title_collation=settings.database.title_collation)
    )
    app.state.category_service = CategoryService(CategoryRepository(pool))
    app.state.stats_repository = StatsRepository(pool)

    logger.info("Recipe catalog ready")


async def _shutdown(app: FastAPI) -> None:
    logger.info("Stopping recipe catalog")
    for name in _STATE_ATTRIBUTES:
        setattr(app.state, name, None)
    await close_database_pool()
    logger.info("Recipe catalog stopped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """FastAPI lifespan handler.

    Uses ``app.state.settings`` when ``create_app`` stored one, otherwise the
    cached settings.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
