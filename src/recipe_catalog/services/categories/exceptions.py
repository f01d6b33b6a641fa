"""Category service exceptions."""

from __future__ import annotations


class CategoryServiceError(Exception):
    """Base exception for category service errors."""


class CategoryNotFoundError(CategoryServiceError):
    """Raised when a category does not exist."""

    def __init__(self, category_id: int) -> None:
        self.category_id = category_id
        super().__init__(f"Category {category_id} not found")


class CategoryNotDeletedError(CategoryServiceError):
    """Raised when restoring a category that is still active."""

    def __init__(self, category_id: int) -> None:
        self.category_id = category_id
        super().__init__(f"Category {category_id} is not deleted")
