# File: api/routers/comments/comments.py

from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from common.dependencies.services_dep import get_comment_service, get_view_composer
from common.schemas.standard_response import StandardResponse
from common.security.auth import get_current_actor
from domain.comments.services.comment_service import CommentService
from domain.views.services.view_composer import ViewComposer

router = APIRouter(prefix="/comments", tags=["Comments"])


class CommentRequest(BaseModel):
    content: str = Field(..., json_schema_extra={"example": "Great video!"})


@router.get("/{video_id}", response_model=StandardResponse, summary="Comments of a video")
async def get_video_comments(
    video_id: str,
    composer: Annotated[ViewComposer, Depends(get_view_composer)],
    page: Annotated[Optional[str], Query()] = None,
    limit: Annotated[Optional[str], Query()] = None,
    sort_by: Annotated[Optional[str], Query()] = None,
    sort_type: Annotated[Optional[Literal["asc", "desc"]], Query()] = None,
):
    result = await composer.video_comments(video_id, page=page, limit=limit, sort_by=sort_by, sort_type=sort_type)
    return StandardResponse.success(data=result, message="Comments fetched successfully")


@router.post("/{video_id}", response_model=StandardResponse, status_code=status.HTTP_201_CREATED, summary="Comment on a video")
async def add_comment(
    video_id: str,
    payload: CommentRequest,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[CommentService, Depends(get_comment_service)],
):
    comment = await service.add_comment(actor_id, video_id, payload.content)
    return StandardResponse.success(data=comment, message="Comment added successfully", code=201)


@router.patch("/c/{comment_id}", response_model=StandardResponse, summary="Edit own comment")
async def update_comment(
    comment_id: str,
    payload: CommentRequest,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[CommentService, Depends(get_comment_service)],
):
    comment = await service.update_comment(actor_id, comment_id, payload.content)
    return StandardResponse.success(data=comment, message="Comment updated successfully")


@router.delete("/c/{comment_id}", response_model=StandardResponse, summary="Delete own comment")
async def delete_comment(
    comment_id: str,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[CommentService, Depends(get_comment_service)],
):
    await service.delete_comment(actor_id, comment_id)
    return StandardResponse.success(data={}, message="Comment deleted successfully")
