"""Probes for the process (``/health``) and its database (``/ready``)."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from recipe_catalog.core.config import Settings, get_settings
from recipe_catalog.database.connection import check_database_health
from recipe_catalog.schemas.enums import HealthStatus
from recipe_catalog.schemas.health import HealthResponse, ReadinessResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Answers as long as the process serves HTTP.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Never touches the database."""
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="503 with status `degraded` while PostgreSQL cannot be reached.",
    responses={503: {"description": "A dependency is unavailable"}},
)
async def readiness_check(
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ReadinessResponse:
    dependencies = await check_database_health()

    ready = all(state == "healthy" for state in dependencies.values())
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status=HealthStatus.READY if ready else HealthStatus.DEGRADED,
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
