"""Fixtures for HTTP-level endpoint tests.

The app is created without running its lifespan, so no database pool is
opened; services on ``app.state`` are replaced with mocks.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from recipe_catalog.core.config import Settings
from recipe_catalog.factory import create_app


API = "/api/v1"


def _async_mock_with(*methods: str) -> MagicMock:
    mock = MagicMock()
    for name in methods:
        setattr(mock, name, AsyncMock())
    return mock


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the test environment."""
    return Settings(APP_ENV="test")


@pytest.fixture
def recipe_service() -> MagicMock:
    """Mocked RecipeService."""
    return _async_mock_with(
        "list_recipes",
        "get_recipe",
        "create_recipe",
        "update_recipe",
        "delete_recipe",
        "restore_recipe",
        "hard_delete_recipe",
        "list_deleted_recipes",
    )


@pytest.fixture
def category_service() -> MagicMock:
    """Mocked CategoryService."""
    return _async_mock_with(
        "list_categories",
        "get_category",
        "get_category_recipes",
        "create_category",
        "update_category",
        "delete_category",
        "restore_category",
    )


@pytest.fixture
def stats_repository() -> MagicMock:
    """Mocked StatsRepository."""
    return _async_mock_with("get_stats")


@pytest.fixture
def app(
    test_settings: Settings,
    recipe_service: MagicMock,
    category_service: MagicMock,
    stats_repository: MagicMock,
) -> FastAPI:
    """Application with mocked services."""
    application = create_app(test_settings)
    application.state.recipe_service = recipe_service
    application.state.category_service = category_service
    application.state.stats_repository = stats_repository
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client that does not run the lifespan."""
    return TestClient(app)
