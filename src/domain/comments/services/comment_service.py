# File: domain/comments/services/comment_service.py
from typing import Any, Dict

from common.base_service.base_service import BaseService
from common.exceptions.base_exception import NotFoundException
from common.security.access_guard import ensure_owned
from common.utils.date_utils import utc_now_iso
from common.utils.document_utils import to_public
from common.utils.validation import ensure_object_id, require_text
from domain.comments.entities.comment_entity import Comment
from domain.views.services.joins import apply_join, owner_join
from infrastructure.database.mongodb.repositories.entity_store import EntityStore


class CommentService(BaseService):
    def __init__(self, store: EntityStore):
        self.store = store

    async def add_comment(self, actor_id: str, video_id: str, content: str) -> Dict[str, Any]:
        ensure_object_id(actor_id, "user id")
        ensure_object_id(video_id, "video id")
        content = require_text(content, "Comment")

        async def operation():
            if not await self.store.get_video(video_id):
                raise NotFoundException(detail="Video not found.")
            if not await self.store.get_user(actor_id):
                raise NotFoundException(detail="User not found.")

            comment_id = await self.store.insert_comment(Comment(content=content, video=video_id, owner=actor_id))
            [comment] = await apply_join(self.store, [await self.store.get_comment(comment_id)], owner_join())
            comment["owner"] = to_public(comment["owner"])
            return to_public(comment)

        return await self.execute(operation, {"action": "add_comment", "entity_type": "video", "entity_id": video_id, "actor_id": actor_id})

    async def update_comment(self, actor_id: str, comment_id: str, content: str) -> Dict[str, Any]:
        ensure_object_id(actor_id, "user id")
        ensure_object_id(comment_id, "comment id")
        content = require_text(content, "Comment")

        async def operation():
            ensure_owned(await self.store.get_comment(comment_id), actor_id, "Comment")
            updated = await self.store.comments.find_one_and_update(
                {"_id": comment_id},
                {"$set": {"content": content, "updated_at": utc_now_iso()}},
            )
            if not updated:
                raise NotFoundException(detail="Comment not found.")
            return to_public(updated)

        return await self.execute(operation, {"action": "update_comment", "entity_type": "comment", "entity_id": comment_id, "actor_id": actor_id})

    async def delete_comment(self, actor_id: str, comment_id: str) -> bool:
        ensure_object_id(actor_id, "user id")
        ensure_object_id(comment_id, "comment id")

        async def operation():
            ensure_owned(await self.store.get_comment(comment_id), actor_id, "Comment")
            return await self.store.comments.delete_one({"_id": comment_id}) == 1

        return await self.execute(operation, {"action": "delete_comment", "entity_type": "comment", "entity_id": comment_id, "actor_id": actor_id})
