"""Catalog statistics endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from recipe_catalog.api.dependencies import get_stats_repository
from recipe_catalog.database.repositories.stats import StatsRepository  # noqa: TC001
from recipe_catalog.schemas.stats import StatsResponse


router = APIRouter(tags=["Statistics"])


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Catalog statistics",
    description=(
        "Totals, averages and difficulty breakdown of active recipes, the "
        "categories with most recipes and the newest recipes."
    ),
)
async def get_stats(
    repository: Annotated[StatsRepository, Depends(get_stats_repository)],
) -> StatsResponse:
    stats = await repository.get_stats()
    return StatsResponse.from_data(stats)
