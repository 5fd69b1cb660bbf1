# File: common/dependencies/services_dep.py

from fastapi import Depends, Request

from common.exceptions.base_exception import ServiceUnavailableException
from common.logging.logger import log_error
from domain.comments.services.comment_service import CommentService
from domain.playlists.services.playlist_service import PlaylistService
from domain.relationships.services.toggle_service import RelationshipToggleManager
from domain.stats.services.stats_aggregator import StatsAggregator
from domain.videos.services.video_service import VideoService
from domain.views.services.view_composer import ViewComposer
from infrastructure.database.mongodb.mongo_client import get_entity_store
from infrastructure.database.mongodb.repositories.entity_store import EntityStore
from infrastructure.external.media.cloudinary_client import MediaUploader


def get_media_uploader(request: Request) -> MediaUploader:
    uploader = getattr(request.app.state, "media_uploader", None)
    if uploader is None:
        log_error("Media uploader dependency check failed", extra={"service": "media"})
        raise ServiceUnavailableException("Media storage is unavailable.")
    return uploader


def get_view_composer(store: EntityStore = Depends(get_entity_store)) -> ViewComposer:
    return ViewComposer(store)


def get_toggle_manager(store: EntityStore = Depends(get_entity_store)) -> RelationshipToggleManager:
    return RelationshipToggleManager(store)


def get_stats_aggregator(store: EntityStore = Depends(get_entity_store)) -> StatsAggregator:
    return StatsAggregator(store)


def get_video_service(
    store: EntityStore = Depends(get_entity_store),
    uploader: MediaUploader = Depends(get_media_uploader),
) -> VideoService:
    return VideoService(store, uploader)


def get_comment_service(store: EntityStore = Depends(get_entity_store)) -> CommentService:
    return CommentService(store)


def get_playlist_service(store: EntityStore = Depends(get_entity_store)) -> PlaylistService:
    return PlaylistService(store)
