"""Integration test fixtures.

Provides a real PostgreSQL database via testcontainers. Tests are skipped
when no Docker daemon is reachable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg
import docker
import pytest
from docker.errors import DockerException
from httpx import ASGITransport, AsyncClient
from testcontainers.postgres import PostgresContainer

import recipe_catalog.database.connection as db_module
from recipe_catalog.core.config import Settings
from recipe_catalog.database.repositories import (
    CategoryRepository,
    RecipeRepository,
    StatsRepository,
)
from recipe_catalog.database.schema import create_schema
from recipe_catalog.factory import create_app
from recipe_catalog.services.categories.service import CategoryService
from recipe_catalog.services.recipes.service import RecipeService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

    from fastapi import FastAPI


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer]:
    """Start a PostgreSQL container for the test session."""
    try:
        docker.from_env().ping()
    except DockerException:
        pytest.skip("Docker is not available")

    with PostgresContainer(
        "postgres:16-alpine",
        username="catalog",
        password="catalog",
        dbname="recipe_catalog_test",
    ) as postgres:
        yield postgres


@pytest.fixture(scope="session")
def postgres_dsn(postgres_container: PostgresContainer) -> str:
    """asyncpg DSN for the container."""
    host = postgres_container.get_container_host_ip()
    port = postgres_container.get_exposed_port(5432)
    return f"postgresql://catalog:catalog@{host}:{port}/recipe_catalog_test"


@pytest.fixture
async def pool(postgres_dsn: str) -> AsyncGenerator[asyncpg.Pool]:
    """Pool on a freshly emptied schema."""
    db_pool = await asyncpg.create_pool(postgres_dsn, min_size=1, max_size=5)
    await create_schema(db_pool)
    async with db_pool.acquire() as conn:
        await conn.execute("TRUNCATE recipes, categories RESTART IDENTITY CASCADE")
    try:
        yield db_pool
    finally:
        await db_pool.close()


@pytest.fixture
def recipes(pool: asyncpg.Pool) -> RecipeRepository:
    """Recipe repository on the test database."""
    return RecipeRepository(pool)


@pytest.fixture
def categories(pool: asyncpg.Pool) -> CategoryRepository:
    """Category repository on the test database."""
    return CategoryRepository(pool)


@pytest.fixture
def app(pool: asyncpg.Pool) -> Generator[FastAPI]:
    """Application wired to the test database without running its lifespan."""
    application = create_app(Settings(APP_ENV="test"))
    application.state.recipe_service = RecipeService(RecipeRepository(pool))
    application.state.category_service = CategoryService(CategoryRepository(pool))
    application.state.stats_repository = StatsRepository(pool)
    db_module._pool = pool
    yield application
    db_module._pool = None


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client calling the application in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as http_client:
        yield http_client
