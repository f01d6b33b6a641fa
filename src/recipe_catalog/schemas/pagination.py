"""Pagination schemas shared by list endpoints."""

from __future__ import annotations

from pydantic import Field

from recipe_catalog.schemas.base import APIResponse


class PaginationResponse(APIResponse):
    """Pagination metadata for a list response."""

    total: int = Field(..., ge=0, description="Rows matching the filters, ignoring paging")
    limit: int = Field(..., description="Requested page size")
    offset: int = Field(..., description="Requested offset")
    returned: int = Field(..., ge=0, description="Rows in this page")
