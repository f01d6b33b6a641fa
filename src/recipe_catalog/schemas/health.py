"""Bodies of the liveness and readiness probes."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from recipe_catalog.schemas.base import APIResponse
from recipe_catalog.schemas.enums import HealthStatus


def _utc_now() -> datetime:
    return datetime.now(UTC)


class HealthResponse(APIResponse):
    status: HealthStatus = Field(..., examples=["healthy"])
    timestamp: datetime = Field(default_factory=_utc_now)
    version: str
    environment: str


class ReadinessResponse(HealthResponse):
    """``dependencies`` maps each backing service to its probe result."""

    dependencies: dict[str, str] = Field(
        default_factory=dict,
        examples=[{"database": "healthy"}],
    )
