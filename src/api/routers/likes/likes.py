# File: api/routers/likes/likes.py

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from common.dependencies.services_dep import get_toggle_manager, get_view_composer
from common.schemas.standard_response import StandardResponse
from common.security.auth import get_current_actor
from domain.relationships.services.toggle_service import RelationshipToggleManager, ToggleState
from domain.views.services.view_composer import ViewComposer

router = APIRouter(prefix="/likes", tags=["Likes"])


@router.post("/toggle/v/{video_id}", response_model=StandardResponse, summary="Like or unlike a video")
async def toggle_video_like(
    video_id: str,
    actor_id: Annotated[str, Depends(get_current_actor)],
    manager: Annotated[RelationshipToggleManager, Depends(get_toggle_manager)],
):
    result = await manager.toggle_video_like(actor_id, video_id)
    message = "Video liked successfully" if result.state is ToggleState.ADDED else "Video unliked successfully"
    return StandardResponse.success(data=result.model_dump(mode="json"), message=message)


@router.post("/toggle/c/{comment_id}", response_model=StandardResponse, summary="Like or unlike a comment")
async def toggle_comment_like(
    comment_id: str,
    actor_id: Annotated[str, Depends(get_current_actor)],
    manager: Annotated[RelationshipToggleManager, Depends(get_toggle_manager)],
):
    result = await manager.toggle_comment_like(actor_id, comment_id)
    message = "Comment liked successfully" if result.state is ToggleState.ADDED else "Comment unliked successfully"
    return StandardResponse.success(data=result.model_dump(mode="json"), message=message)


@router.get("/videos", response_model=StandardResponse, summary="Videos liked by the current user")
async def get_liked_videos(
    actor_id: Annotated[str, Depends(get_current_actor)],
    composer: Annotated[ViewComposer, Depends(get_view_composer)],
    page: Annotated[Optional[str], Query()] = None,
    limit: Annotated[Optional[str], Query()] = None,
):
    result = await composer.liked_videos(actor_id, page=page, limit=limit)
    return StandardResponse.success(data=result, message="Fetched liked videos successfully")
