# File: domain/playlists/services/playlist_service.py
from typing import Any, Dict, Optional

from common.base_service.base_service import BaseService
from common.exceptions.base_exception import BadRequestException, ConflictException, NotFoundException
from common.security.access_guard import ensure_owned
from common.utils.date_utils import utc_now_iso
from common.utils.document_utils import to_public
from common.utils.validation import ensure_object_id, require_text
from domain.playlists.entities.playlist_entity import Playlist
from infrastructure.database.mongodb.repositories.entity_store import EntityStore


class PlaylistService(BaseService):
    def __init__(self, store: EntityStore):
        self.store = store

    async def _ensure_name_free(self, owner_id: str, name: str, exclude_id: Optional[str] = None):
        existing = await self.store.playlists.find_one({"owner": owner_id, "name": name})
        if existing and existing["_id"] != exclude_id:
            raise ConflictException(detail="A playlist with the same name already exists.")

    async def _owned_playlist(self, actor_id: str, playlist_id: str) -> Dict[str, Any]:
        return ensure_owned(await self.store.get_playlist(playlist_id), actor_id, "Playlist")

    async def create_playlist(self, actor_id: str, name: str, description: str) -> Dict[str, Any]:
        ensure_object_id(actor_id, "user id")
        name = require_text(name, "Name")
        description = require_text(description, "Description")

        async def operation():
            if not await self.store.get_user(actor_id):
                raise NotFoundException(detail="User not found.")
            await self._ensure_name_free(actor_id, name)
            playlist_id = await self.store.insert_playlist(Playlist(name=name, description=description, owner=actor_id))
            return to_public(await self.store.get_playlist(playlist_id))

        return await self.execute(operation, {"action": "create_playlist", "entity_type": "playlist", "actor_id": actor_id})

    async def update_playlist(self, actor_id: str, playlist_id: str, name: Optional[str] = None, description: Optional[str] = None) -> Dict[str, Any]:
        ensure_object_id(actor_id, "user id")
        ensure_object_id(playlist_id, "playlist id")
        changes: Dict[str, Any] = {}
        if name is not None:
            changes["name"] = require_text(name, "Name")
        if description is not None:
            changes["description"] = require_text(description, "Description")
        if not changes:
            raise BadRequestException(detail="No valid fields to update.")

        async def operation():
            await self._owned_playlist(actor_id, playlist_id)
            if "name" in changes:
                await self._ensure_name_free(actor_id, changes["name"], exclude_id=playlist_id)
            changes["updated_at"] = utc_now_iso()
            updated = await self.store.playlists.find_one_and_update({"_id": playlist_id}, {"$set": changes})
            if not updated:
                raise NotFoundException(detail="Playlist not found.")
            return to_public(updated)

        return await self.execute(operation, {"action": "update_playlist", "entity_type": "playlist", "entity_id": playlist_id, "actor_id": actor_id})

    async def delete_playlist(self, actor_id: str, playlist_id: str) -> bool:
        ensure_object_id(actor_id, "user id")
        ensure_object_id(playlist_id, "playlist id")

        async def operation():
            await self._owned_playlist(actor_id, playlist_id)
            return await self.store.playlists.delete_one({"_id": playlist_id}) == 1

        return await self.execute(operation, {"action": "delete_playlist", "entity_type": "playlist", "entity_id": playlist_id, "actor_id": actor_id})

    async def add_video_to_playlist(self, actor_id: str, playlist_id: str, video_id: str) -> Dict[str, Any]:
        ensure_object_id(actor_id, "user id")
        ensure_object_id(playlist_id, "playlist id")
        ensure_object_id(video_id, "video id")

        async def operation():
            await self._owned_playlist(actor_id, playlist_id)
            if not await self.store.get_video(video_id):
                raise NotFoundException(detail="Video not found.")
            # $addToSet: re-adding a member is a no-op
            updated = await self.store.playlists.find_one_and_update(
                {"_id": playlist_id},
                {"$addToSet": {"videos": video_id}, "$set": {"updated_at": utc_now_iso()}},
            )
            if not updated:
                raise NotFoundException(detail="Playlist not found.")
            return to_public(updated)

        return await self.execute(operation, {"action": "add_video_to_playlist", "entity_type": "playlist", "entity_id": playlist_id, "video_id": video_id})

    async def remove_video_from_playlist(self, actor_id: str, playlist_id: str, video_id: str) -> Dict[str, Any]:
        ensure_object_id(actor_id, "user id")
        ensure_object_id(playlist_id, "playlist id")
        ensure_object_id(video_id, "video id")

        async def operation():
            await self._owned_playlist(actor_id, playlist_id)
            updated = await self.store.playlists.find_one_and_update(
                {"_id": playlist_id},
                {"$pull": {"videos": video_id}, "$set": {"updated_at": utc_now_iso()}},
            )
            if not updated:
                raise NotFoundException(detail="Playlist not found.")
            return to_public(updated)

        return await self.execute(operation, {"action": "remove_video_from_playlist", "entity_type": "playlist", "entity_id": playlist_id, "video_id": video_id})
