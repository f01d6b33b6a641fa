"""Shared test fixtures and configuration for the recipe catalog tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from recipe_catalog.core.config import get_settings


if TYPE_CHECKING:
    from collections.abc import Generator


os.environ.setdefault("APP_ENV", "test")


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Drop cached settings so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
