"""Unit tests for schema creation and sample data."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

import recipe_catalog.database.connection as db_module
from recipe_catalog.database.schema import SCHEMA_SQL, create_schema
from recipe_catalog.database.seed import SAMPLE_CATEGORIES, SAMPLE_RECIPES, seed_sample_data


pytestmark = pytest.mark.unit


class TestSchemaSql:
    """Tests for the DDL."""

    def test_statements_are_idempotent(self) -> None:
        """Should only create objects that do not exist yet."""
        creates = [line for line in SCHEMA_SQL.splitlines() if line.startswith("CREATE")]

        assert creates
        assert all("IF NOT EXISTS" in line for line in creates)

    def test_active_name_uniqueness_is_partial(self) -> None:
        """Should only enforce unique names among active categories."""
        assert "ON categories(name) WHERE deleted_at IS NULL" in SCHEMA_SQL

    def test_category_removal_uncategorizes_recipes(self) -> None:
        """Should null out category_id when a category row is removed."""
        assert "REFERENCES categories(id) ON DELETE SET NULL" in SCHEMA_SQL


class TestCreateSchema:
    """Tests for create_schema."""

    async def test_executes_ddl(self, mock_pool: MagicMock, mock_conn: MagicMock) -> None:
        """Should run the DDL on the given pool."""
        await create_schema(mock_pool)

        mock_conn.execute.assert_awaited_once_with(SCHEMA_SQL)

    async def test_uses_global_pool(self, mock_pool: MagicMock, mock_conn: MagicMock) -> None:
        """Should fall back to the global pool."""
        db_module._pool = mock_pool

        await create_schema()

        mock_conn.execute.assert_awaited_once()


class TestSeedSampleData:
    """Tests for seed_sample_data."""

    async def test_skips_non_empty_catalog(
        self, mock_pool: MagicMock, mock_conn: MagicMock
    ) -> None:
        """Should leave an existing catalog alone."""
        mock_conn.fetchval.return_value = 12

        assert await seed_sample_data(mock_pool) is False
        mock_conn.executemany.assert_not_called()

    async def test_seeds_empty_catalog(self, mock_pool: MagicMock, mock_conn: MagicMock) -> None:
        """Should insert categories, then recipes linked to them."""
        category_ids = iter(range(1, len(SAMPLE_CATEGORIES) + 1))

        async def fetchval(query: str, *args: object) -> int:
            if query.startswith("SELECT COUNT"):
                return 0
            return next(category_ids)

        mock_conn.fetchval = AsyncMock(side_effect=fetchval)
        mock_conn.transaction = MagicMock()
        mock_conn.transaction.return_value.__aenter__ = AsyncMock(return_value=None)
        mock_conn.transaction.return_value.__aexit__ = AsyncMock(return_value=None)

        assert await seed_sample_data(mock_pool) is True

        rows = mock_conn.executemany.call_args.args[1]
        assert len(rows) == len(SAMPLE_RECIPES)
        assert all(isinstance(row[8], int) for row in rows)
