"""Unit tests for the database pool module."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import asyncpg
import pytest

import recipe_catalog.database.connection as db_module
from recipe_catalog.database.connection import (
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def mock_settings() -> MagicMock:
    """Settings with a small local database section."""
    settings = MagicMock()
    settings.database.host = "localhost"
    settings.database.port = 5432
    settings.database.name = "recipe_catalog_test"
    settings.database.user = "postgres"
    settings.database.min_pool_size = 1
    settings.database.max_pool_size = 5
    settings.database.command_timeout = 30.0
    settings.database.ssl = False
    settings.DATABASE_PASSWORD = ""
    return settings


class TestGetDatabasePool:
    """Tests for fetching the pool."""

    def test_raises_when_not_initialized(self) -> None:
        """Should refuse to hand out a pool before startup."""
        with pytest.raises(RuntimeError, match="not initialized"):
            get_database_pool()

    def test_returns_open_pool(self) -> None:
        """Should return the module-level pool."""
        pool = MagicMock()
        db_module._pool = pool

        assert get_database_pool() is pool


class TestInitDatabasePool:
    """Tests for opening the pool."""

    async def test_initializes_and_verifies(
        self,
        mock_settings: MagicMock,
        mock_pool: MagicMock,
        mock_conn: MagicMock,
    ) -> None:
        """Should create the pool from settings and run SELECT 1."""
        mock_conn.fetchval.return_value = 1

        with (
            patch("recipe_catalog.database.connection.get_settings", return_value=mock_settings),
            patch(
                "recipe_catalog.database.connection.asyncpg.create_pool",
                new_callable=AsyncMock,
                return_value=mock_pool,
            ) as create_pool,
        ):
            pool = await init_database_pool()

        assert pool is mock_pool
        assert db_module._pool is mock_pool
        mock_conn.fetchval.assert_called_once_with("SELECT 1")
        kwargs = create_pool.call_args.kwargs
        assert kwargs["database"] == "recipe_catalog_test"
        assert kwargs["max_size"] == 5
        assert kwargs["command_timeout"] == 30.0
        assert kwargs["password"] is None
        assert kwargs["ssl"] is None

    async def test_is_idempotent(self, mock_pool: MagicMock) -> None:
        """Should return the existing pool without creating another."""
        db_module._pool = mock_pool

        with patch(
            "recipe_catalog.database.connection.asyncpg.create_pool",
            new_callable=AsyncMock,
        ) as create_pool:
            assert await init_database_pool() is mock_pool

        create_pool.assert_not_called()

    async def test_closes_pool_when_probe_fails(
        self,
        mock_settings: MagicMock,
        mock_pool: MagicMock,
        mock_conn: MagicMock,
    ) -> None:
        """Should close the new pool and re-raise when SELECT 1 fails."""
        mock_conn.fetchval.side_effect = OSError("connection refused")

        with (
            patch("recipe_catalog.database.connection.get_settings", return_value=mock_settings),
            patch(
                "recipe_catalog.database.connection.asyncpg.create_pool",
                new_callable=AsyncMock,
                return_value=mock_pool,
            ),
            pytest.raises(OSError, match="connection refused"),
        ):
            await init_database_pool()

        mock_pool.close.assert_awaited_once()
        assert db_module._pool is None


class TestCloseDatabasePool:
    """Tests for closing the pool."""

    async def test_closes_pool(self, mock_pool: MagicMock) -> None:
        """Should close and forget the open pool."""
        db_module._pool = mock_pool

        await close_database_pool()

        mock_pool.close.assert_awaited_once()
        assert db_module._pool is None

    async def test_without_pool(self) -> None:
        """Should be a no-op without a pool."""
        await close_database_pool()


class TestCheckDatabaseHealth:
    """Tests for the readiness probe."""

    async def test_healthy(self, mock_pool: MagicMock, mock_conn: MagicMock) -> None:
        """Should return healthy when the pool responds."""
        mock_conn.fetchval.return_value = 1
        db_module._pool = mock_pool

        assert await check_database_health() == {"database": "healthy"}

    async def test_not_initialized(self) -> None:
        """Should report not_initialized before startup."""
        assert await check_database_health() == {"database": "not_initialized"}

    async def test_unhealthy_on_error(self, mock_pool: MagicMock) -> None:
        """Should return unhealthy when the connection fails."""
        mock_pool.acquire.return_value.__aenter__ = AsyncMock(
            side_effect=asyncpg.InterfaceError("pool is closing")
        )
        db_module._pool = mock_pool

        assert await check_database_health() == {"database": "unhealthy"}
