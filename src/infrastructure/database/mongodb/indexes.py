# File: infrastructure/database/mongodb/indexes.py

from typing import Dict, List, Type

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel
from pymongo import ASCENDING

from common.exceptions.base_exception import ServiceUnavailableException
from common.logging.logger import log_info, log_error
from domain.comments.entities.comment_entity import Comment
from domain.likes.entities.like_entity import Like
from domain.playlists.entities.playlist_entity import Playlist
from domain.subscriptions.entities.subscription_entity import Subscription
from domain.videos.entities.video_entity import Video

COLLECTION_ENTITIES: Dict[str, Type[BaseModel]] = {
    "videos": Video,
    "comments": Comment,
    "likes": Like,
    "subscriptions": Subscription,
    "playlists": Playlist,
}


async def ensure_indexes(db: AsyncIOMotorDatabase) -> List[str]:
    """
    Create the indexes declared on each entity.

    The unique ones back the one-edge-per-pair guarantee for likes and
    subscriptions; toggles depend on them being present.
    """
    created = []
    for collection_name, entity in COLLECTION_ENTITIES.items():
        for spec in getattr(entity, "indexes", []):
            keys = [(field, ASCENDING) for field in spec["fields"]]
            try:
                name = await db[collection_name].create_index(keys, unique=spec.get("unique", False))
            except Exception as e:
                log_error("Index creation failed", extra={"collection": collection_name, "fields": spec["fields"], "error": str(e)}, exc_info=True)
                raise ServiceUnavailableException(f"Failed to create index on {collection_name}") from e
            created.append(f"{collection_name}.{name}")
    log_info("MongoDB indexes ensured", extra={"indexes": created})
    return created
