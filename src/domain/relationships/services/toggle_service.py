# File: domain/relationships/services/toggle_service.py
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel

from common.base_service.base_service import BaseService
from common.exceptions.base_exception import BadRequestException, DuplicateEdgeException, NotFoundException
from common.logging.logger import log_info
from common.utils.validation import ensure_object_id
from domain.likes.entities.like_entity import Like, LikeTargetType
from domain.subscriptions.entities.subscription_entity import Subscription
from infrastructure.database.mongodb.repositories.entity_store import EntityStore


class TargetKind(str, Enum):
    VIDEO = "video"
    COMMENT = "comment"
    CHANNEL = "channel"


class ToggleState(str, Enum):
    ADDED = "added"
    REMOVED = "removed"


class ToggleResult(BaseModel):
    state: ToggleState
    target_kind: TargetKind
    target_id: str
    edge_id: Optional[str] = None


# target kind -> (collection holding the target, collection holding the edges)
TARGET_COLLECTIONS = {
    TargetKind.VIDEO: ("videos", "likes"),
    TargetKind.COMMENT: ("comments", "likes"),
    TargetKind.CHANNEL: ("users", "subscriptions"),
}


class RelationshipToggleManager(BaseService):
    """
    Like/unlike and subscribe/unsubscribe with at most one edge per pair.

    The lookup and the write are separate store calls. Two concurrent
    toggles can both see no edge; the unique index then rejects the second
    insert and that conflict is reported as ``added``.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    def _edge_for(self, actor_id: str, kind: TargetKind, target_id: str) -> Union[Like, Subscription]:
        if kind is TargetKind.CHANNEL:
            return Subscription(subscriber=actor_id, channel=target_id)
        return Like.for_target(actor_id, LikeTargetType(kind.value), target_id)

    async def toggle(self, actor_id: str, target_kind: Union[TargetKind, str], target_id: str) -> ToggleResult:
        try:
            kind = TargetKind(target_kind)
        except ValueError:
            raise BadRequestException(detail=f"Unknown toggle target '{target_kind}'.")
        ensure_object_id(actor_id, "user id")
        ensure_object_id(target_id, f"{kind.value} id")

        target_collection, edge_collection = TARGET_COLLECTIONS[kind]
        edges = self.store.repository(edge_collection)
        edge = self._edge_for(actor_id, kind, target_id)
        edge_key = edge.edge_key()

        async def operation():
            target = await self.store.repository(target_collection).find_one({"_id": target_id}, {"_id": 1})
            if not target:
                raise NotFoundException(detail=f"{kind.value.capitalize()} not found.")

            existing = await edges.find_one(edge_key)
            if existing:
                # delete exactly the edge that was found
                await edges.delete_one({"_id": existing["_id"]})
                return ToggleResult(state=ToggleState.REMOVED, target_kind=kind, target_id=target_id, edge_id=existing["_id"])

            try:
                edge_id = await edges.insert_one(edge.model_dump(exclude={"id"}))
            except DuplicateEdgeException:
                log_info("Concurrent toggle created the edge first", extra={"collection": edge_collection, **edge_key})
                winner = await edges.find_one(edge_key)
                edge_id = winner["_id"] if winner else None
            return ToggleResult(state=ToggleState.ADDED, target_kind=kind, target_id=target_id, edge_id=edge_id)

        return await self.execute(operation, {
            "action": f"toggle_{kind.value}",
            "entity_type": kind.value,
            "entity_id": target_id,
            "actor_id": actor_id,
        })

    async def toggle_video_like(self, actor_id: str, video_id: str) -> ToggleResult:
        return await self.toggle(actor_id, TargetKind.VIDEO, video_id)

    async def toggle_comment_like(self, actor_id: str, comment_id: str) -> ToggleResult:
        return await self.toggle(actor_id, TargetKind.COMMENT, comment_id)

    async def toggle_subscription(self, actor_id: str, channel_id: str) -> ToggleResult:
        return await self.toggle(actor_id, TargetKind.CHANNEL, channel_id)

