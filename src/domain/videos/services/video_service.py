# File: domain/videos/services/video_service.py
import asyncio
from pathlib import Path
from typing import Any, Dict, Optional, Union

from common.base_service.base_service import BaseService
from common.exceptions.base_exception import BadRequestException, NotFoundException
from common.security.access_guard import ensure_owned
from common.utils.date_utils import utc_now_iso
from common.utils.document_utils import to_public
from common.utils.upload_utils import discard_staged
from common.utils.validation import ensure_object_id, require_text
from domain.videos.entities.video_entity import Video
from infrastructure.database.mongodb.repositories.entity_store import EntityStore
from infrastructure.external.media.cloudinary_client import MediaUploader

StagedFile = Union[str, Path]


class VideoService(BaseService):
    def __init__(self, store: EntityStore, uploader: MediaUploader):
        self.store = store
        self.uploader = uploader

    async def publish_video(self, actor_id: str, title: str, description: str, video_path: Optional[StagedFile], thumbnail_path: Optional[StagedFile]) -> Dict[str, Any]:
        try:
            return await self._publish_video(actor_id, title, description, video_path, thumbnail_path)
        finally:
            # staged files never outlive the request, even when rejected before upload
            discard_staged(video_path, thumbnail_path)

    async def _publish_video(
        self,
        actor_id: str,
        title: str,
        description: str,
        video_path: Optional[StagedFile],
        thumbnail_path: Optional[StagedFile],
    ) -> Dict[str, Any]:
        ensure_object_id(actor_id, "user id")
        title = require_text(title, "Title")
        description = require_text(description, "Description")
        if not video_path:
            raise BadRequestException(detail="No video file found.")
        if not thumbnail_path:
            raise BadRequestException(detail="No thumbnail file found.")

        async def operation():
            if not await self.store.get_user(actor_id):
                raise NotFoundException(detail="User not found.")

            video_upload, thumbnail_upload = await asyncio.gather(
                self.uploader.upload(video_path),
                self.uploader.upload(thumbnail_path),
                return_exceptions=True,
            )
            # nothing is written unless both files made it to storage
            for outcome in (video_upload, thumbnail_upload):
                if isinstance(outcome, BaseException):
                    raise outcome

            video = Video(
                title=title,
                description=description,
                video_file=video_upload.url,
                thumbnail=thumbnail_upload.url,
                duration=video_upload.duration or 0,
                owner=actor_id,
            )
            video_id = await self.store.insert_video(video)
            return to_public(await self.store.get_video(video_id))

        return await self.execute(operation, {"action": "publish_video", "entity_type": "video", "actor_id": actor_id})

    async def update_video(
        self,
        actor_id: str,
        video_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail_path: Optional[StagedFile] = None,
    ) -> Dict[str, Any]:
        try:
            return await self._update_video(actor_id, video_id, title, description, thumbnail_path)
        finally:
            discard_staged(thumbnail_path)

    async def _update_video(
        self,
        actor_id: str,
        video_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail_path: Optional[StagedFile] = None,
    ) -> Dict[str, Any]:
        ensure_object_id(actor_id, "user id")
        ensure_object_id(video_id, "video id")
        changes: Dict[str, Any] = {}
        if title is not None:
            changes["title"] = require_text(title, "Title")
        if description is not None:
            changes["description"] = require_text(description, "Description")
        if not changes and not thumbnail_path:
            raise BadRequestException(detail="No valid fields to update.")

        async def operation():
            ensure_owned(await self.store.get_video(video_id), actor_id, "Video")
            if thumbnail_path:
                thumbnail = await self.uploader.upload(thumbnail_path)
                changes["thumbnail"] = thumbnail.url
            changes["updated_at"] = utc_now_iso()
            # one $set: either every field lands or none does
            updated = await self.store.videos.find_one_and_update({"_id": video_id}, {"$set": changes})
            if not updated:
                raise NotFoundException(detail="Video not found.")
            return to_public(updated)

        return await self.execute(operation, {"action": "update_video", "entity_type": "video", "entity_id": video_id, "actor_id": actor_id})

    async def delete_video(self, actor_id: str, video_id: str) -> bool:
        ensure_object_id(actor_id, "user id")
        ensure_object_id(video_id, "video id")

        async def operation():
            ensure_owned(await self.store.get_video(video_id), actor_id, "Video")
            # likes, comments and playlist entries are left for maintenance cleanup
            return await self.store.videos.delete_one({"_id": video_id}) == 1

        return await self.execute(operation, {"action": "delete_video", "entity_type": "video", "entity_id": video_id, "actor_id": actor_id})

    async def toggle_publish_status(self, actor_id: str, video_id: str) -> Dict[str, Any]:
        ensure_object_id(actor_id, "user id")
        ensure_object_id(video_id, "video id")

        async def operation():
            video = ensure_owned(await self.store.get_video(video_id), actor_id, "Video")
            updated = await self.store.videos.find_one_and_update(
                {"_id": video_id},
                {"$set": {"is_published": not video.get("is_published", True), "updated_at": utc_now_iso()}},
            )
            if not updated:
                raise NotFoundException(detail="Video not found.")
            return to_public(updated)

        return await self.execute(operation, {"action": "toggle_publish_status", "entity_type": "video", "entity_id": video_id, "actor_id": actor_id})
