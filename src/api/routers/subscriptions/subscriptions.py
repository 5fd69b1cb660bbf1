# File: api/routers/subscriptions/subscriptions.py

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from common.dependencies.services_dep import get_toggle_manager, get_view_composer
from common.schemas.standard_response import StandardResponse
from common.security.auth import get_current_actor
from domain.relationships.services.toggle_service import RelationshipToggleManager, ToggleState
from domain.views.services.view_composer import ViewComposer

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("/c/{channel_id}", response_model=StandardResponse, summary="Subscribe or unsubscribe")
async def toggle_subscription(
    channel_id: str,
    actor_id: Annotated[str, Depends(get_current_actor)],
    manager: Annotated[RelationshipToggleManager, Depends(get_toggle_manager)],
):
    result = await manager.toggle_subscription(actor_id, channel_id)
    message = "Channel subscribed successfully" if result.state is ToggleState.ADDED else "Channel unsubscribed successfully"
    return StandardResponse.success(data=result.model_dump(mode="json"), message=message)


@router.get("/c/{channel_id}", response_model=StandardResponse, summary="Subscribers of a channel")
async def get_channel_subscribers(
    channel_id: str,
    composer: Annotated[ViewComposer, Depends(get_view_composer)],
    page: Annotated[Optional[str], Query()] = None,
    limit: Annotated[Optional[str], Query()] = None,
):
    result = await composer.channel_subscribers(channel_id, page=page, limit=limit)
    return StandardResponse.success(data=result, message="Subscribers fetched successfully")


@router.get("/u/{subscriber_id}", response_model=StandardResponse, summary="Channels a user subscribes to")
async def get_subscribed_channels(
    subscriber_id: str,
    composer: Annotated[ViewComposer, Depends(get_view_composer)],
    page: Annotated[Optional[str], Query()] = None,
    limit: Annotated[Optional[str], Query()] = None,
):
    result = await composer.subscribed_channels(subscriber_id, page=page, limit=limit)
    return StandardResponse.success(data=result, message="Subscribed channels fetched successfully")
