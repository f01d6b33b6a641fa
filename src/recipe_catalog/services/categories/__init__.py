"""Category service package."""

from recipe_catalog.services.categories.exceptions import (
    CategoryNotDeletedError,
    CategoryNotFoundError,
    CategoryServiceError,
)
from recipe_catalog.services.categories.service import CategoryService


__all__ = [
    "CategoryNotDeletedError",
    "CategoryNotFoundError",
    "CategoryService",
    "CategoryServiceError",
]
