# File: api/routers/videos/videos.py

from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from common.dependencies.services_dep import get_video_service, get_view_composer
from common.schemas.standard_response import StandardResponse
from common.security.auth import get_current_actor
from common.utils.upload_utils import stage_upload
from domain.videos.services.video_service import VideoService
from domain.views.services.view_composer import ViewComposer

router = APIRouter(prefix="/videos", tags=["Videos"])


@router.get(
    "",
    response_model=StandardResponse,
    summary="Video feed",
    description="Paginated videos with owner profile, optionally filtered by text query and owner.",
)
async def get_all_videos(
    composer: Annotated[ViewComposer, Depends(get_view_composer)],
    page: Annotated[Optional[str], Query()] = None,
    limit: Annotated[Optional[str], Query()] = None,
    query: Annotated[Optional[str], Query(description="Matched against title and description")] = None,
    sort_by: Annotated[Optional[str], Query(examples=["created_at", "views"])] = None,
    sort_type: Annotated[Optional[Literal["asc", "desc"]], Query()] = None,
    user_id: Annotated[Optional[str], Query(description="Restrict to one channel")] = None,
):
    result = await composer.video_feed(query=query, owner=user_id, page=page, limit=limit, sort_by=sort_by, sort_type=sort_type)
    return StandardResponse.success(data=result, message="Fetched all videos")


@router.post("", response_model=StandardResponse, status_code=status.HTTP_201_CREATED, summary="Publish a video")
async def publish_video(
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[VideoService, Depends(get_video_service)],
    title: Annotated[str, Form()],
    description: Annotated[str, Form()],
    video_file: Annotated[UploadFile, File()],
    thumbnail: Annotated[UploadFile, File()],
):
    video = await service.publish_video(
        actor_id=actor_id,
        title=title,
        description=description,
        video_path=await stage_upload(video_file),
        thumbnail_path=await stage_upload(thumbnail),
    )
    return StandardResponse.success(data=video, message="Video published successfully", code=201)


@router.get("/{video_id}", response_model=StandardResponse, summary="Get a video by id")
async def get_video_by_id(video_id: str, composer: Annotated[ViewComposer, Depends(get_view_composer)]):
    video = await composer.video_by_id(video_id)
    return StandardResponse.success(data=video, message="Video fetched successfully")


@router.patch("/{video_id}", response_model=StandardResponse, summary="Update title, description or thumbnail")
async def update_video(
    video_id: str,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[VideoService, Depends(get_video_service)],
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    thumbnail: Annotated[Optional[UploadFile], File()] = None,
):
    video = await service.update_video(
        actor_id=actor_id,
        video_id=video_id,
        title=title,
        description=description,
        thumbnail_path=await stage_upload(thumbnail),
    )
    return StandardResponse.success(data=video, message="Video updated successfully")


@router.delete("/{video_id}", response_model=StandardResponse, summary="Delete a video")
async def delete_video(
    video_id: str,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[VideoService, Depends(get_video_service)],
):
    await service.delete_video(actor_id, video_id)
    return StandardResponse.success(data={}, message="Video deleted successfully")


@router.patch("/toggle/publish/{video_id}", response_model=StandardResponse, summary="Toggle publish status")
async def toggle_publish_status(
    video_id: str,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[VideoService, Depends(get_video_service)],
):
    video = await service.toggle_publish_status(actor_id, video_id)
    return StandardResponse.success(data=video, message="Publish status toggled successfully")
