# File: api/routers/dashboard/dashboard.py

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from common.dependencies.services_dep import get_stats_aggregator, get_view_composer
from common.schemas.standard_response import StandardResponse
from common.security.auth import get_current_actor
from domain.stats.services.stats_aggregator import StatsAggregator
from domain.views.services.view_composer import ViewComposer

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=StandardResponse, summary="Channel totals for the current user")
async def get_channel_stats(
    actor_id: Annotated[str, Depends(get_current_actor)],
    aggregator: Annotated[StatsAggregator, Depends(get_stats_aggregator)],
):
    stats = await aggregator.channel_stats(actor_id)
    return StandardResponse.success(data=stats.model_dump(), message="Channel stats fetched")


@router.get("/videos", response_model=StandardResponse, summary="Videos uploaded by the current user")
async def get_channel_videos(
    actor_id: Annotated[str, Depends(get_current_actor)],
    composer: Annotated[ViewComposer, Depends(get_view_composer)],
    page: Annotated[Optional[str], Query()] = None,
    limit: Annotated[Optional[str], Query()] = None,
    is_published: Annotated[Optional[bool], Query()] = None,
):
    result = await composer.channel_videos(actor_id, is_published=is_published, page=page, limit=limit)
    return StandardResponse.success(data=result, message="Channel videos fetched successfully")
