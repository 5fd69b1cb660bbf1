# File: api/routers/playlists/playlists.py

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from common.dependencies.services_dep import get_playlist_service, get_view_composer
from common.schemas.standard_response import StandardResponse
from common.security.auth import get_current_actor
from domain.playlists.services.playlist_service import PlaylistService
from domain.views.services.view_composer import ViewComposer

router = APIRouter(prefix="/playlists", tags=["Playlists"])


class CreatePlaylistRequest(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Watch later"})
    description: str = Field(..., json_schema_extra={"example": "Videos to catch up on"})


class UpdatePlaylistRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


@router.post("", response_model=StandardResponse, status_code=status.HTTP_201_CREATED, summary="Create a playlist")
async def create_playlist(
    payload: CreatePlaylistRequest,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[PlaylistService, Depends(get_playlist_service)],
):
    playlist = await service.create_playlist(actor_id, payload.name, payload.description)
    return StandardResponse.success(data=playlist, message="Playlist created successfully", code=201)


@router.get("/user/{user_id}", response_model=StandardResponse, summary="Playlists of a user")
async def get_user_playlists(
    user_id: str,
    composer: Annotated[ViewComposer, Depends(get_view_composer)],
    page: Annotated[Optional[str], Query()] = None,
    limit: Annotated[Optional[str], Query()] = None,
):
    result = await composer.user_playlists(user_id, page=page, limit=limit)
    return StandardResponse.success(data=result, message="User playlists fetched successfully")


@router.get("/{playlist_id}", response_model=StandardResponse, summary="Playlist with its videos")
async def get_playlist_by_id(
    playlist_id: str,
    composer: Annotated[ViewComposer, Depends(get_view_composer)],
    page: Annotated[Optional[str], Query()] = None,
    limit: Annotated[Optional[str], Query()] = None,
):
    result = await composer.playlist_with_videos(playlist_id, page=page, limit=limit)
    return StandardResponse.success(data=result, message="Playlist fetched successfully")


@router.patch("/{playlist_id}", response_model=StandardResponse, summary="Rename or describe a playlist")
async def update_playlist(
    playlist_id: str,
    payload: UpdatePlaylistRequest,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[PlaylistService, Depends(get_playlist_service)],
):
    playlist = await service.update_playlist(actor_id, playlist_id, payload.name, payload.description)
    return StandardResponse.success(data=playlist, message="Playlist updated successfully")


@router.delete("/{playlist_id}", response_model=StandardResponse, summary="Delete a playlist")
async def delete_playlist(
    playlist_id: str,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[PlaylistService, Depends(get_playlist_service)],
):
    await service.delete_playlist(actor_id, playlist_id)
    return StandardResponse.success(data={}, message="Playlist deleted successfully")


@router.patch("/add/{video_id}/{playlist_id}", response_model=StandardResponse, summary="Add a video to a playlist")
async def add_video_to_playlist(
    video_id: str,
    playlist_id: str,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[PlaylistService, Depends(get_playlist_service)],
):
    playlist = await service.add_video_to_playlist(actor_id, playlist_id, video_id)
    return StandardResponse.success(data=playlist, message="Video added to playlist")


@router.patch("/remove/{video_id}/{playlist_id}", response_model=StandardResponse, summary="Remove a video from a playlist")
async def remove_video_from_playlist(
    video_id: str,
    playlist_id: str,
    actor_id: Annotated[str, Depends(get_current_actor)],
    service: Annotated[PlaylistService, Depends(get_playlist_service)],
):
    playlist = await service.remove_video_from_playlist(actor_id, playlist_id, video_id)
    return StandardResponse.success(data=playlist, message="Video removed from playlist")
