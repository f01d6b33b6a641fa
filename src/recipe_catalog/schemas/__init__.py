"""Pydantic schemas for request/response validation.

Only the dependency-free modules are re-exported here; the request and
response models import the repository DTOs and are imported from their own
modules.
"""

from recipe_catalog.schemas.base import APIRequest, APIResponse
from recipe_catalog.schemas.enums import Difficulty, HealthStatus, RecipeSortField, SortOrder


__all__ = [
    "APIRequest",
    "APIResponse",
    "Difficulty",
    "HealthStatus",
    "RecipeSortField",
    "SortOrder",
]
