"""Enumeration types shared by the repositories and the API schemas."""

from __future__ import annotations

from enum import StrEnum


class Difficulty(StrEnum):
    """Recipe difficulty level."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class RecipeSortField(StrEnum):
    """Columns a recipe listing can be sorted by."""

    TITLE = "title"
    PREP_TIME = "prep_time"
    COOK_TIME = "cook_time"
    CREATED_AT = "created_at"
    SERVINGS = "servings"
    TOTAL_TIME = "total_time"


class SortOrder(StrEnum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class HealthStatus(StrEnum):
    """Health status of the service or one of its dependencies."""

    HEALTHY = "healthy"
    READY = "ready"
    DEGRADED = "degraded"
