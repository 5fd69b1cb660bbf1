# File: infrastructure/database/mongodb/repositories/entity_store.py
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from domain.comments.entities.comment_entity import Comment
from domain.likes.entities.like_entity import Like
from domain.playlists.entities.playlist_entity import Playlist
from domain.subscriptions.entities.subscription_entity import Subscription
from domain.users.entities.user_entity import User
from domain.videos.entities.video_entity import Video
from infrastructure.database.mongodb.repository import MongoRepository


class EntityStore:
    """
    Typed access to every collection of the content graph.

    The only component that talks to MongoDB; services and view builders
    work with the per-collection repositories exposed here.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users = MongoRepository(db, "users")
        self.videos = MongoRepository(db, "videos")
        self.comments = MongoRepository(db, "comments")
        self.likes = MongoRepository(db, "likes")
        self.subscriptions = MongoRepository(db, "subscriptions")
        self.playlists = MongoRepository(db, "playlists")

    def repository(self, collection: str) -> MongoRepository:
        return getattr(self, collection)

    # --- creates -------------------------------------------------------

    async def insert_user(self, user: User) -> str:
        return await self.users.insert_one(user.model_dump(exclude={"id"}))

    async def insert_video(self, video: Video) -> str:
        return await self.videos.insert_one(video.model_dump(exclude={"id"}))

    async def insert_comment(self, comment: Comment) -> str:
        return await self.comments.insert_one(comment.model_dump(exclude={"id"}))

    async def insert_like(self, like: Like) -> str:
        return await self.likes.insert_one(like.model_dump(exclude={"id"}))

    async def insert_subscription(self, subscription: Subscription) -> str:
        return await self.subscriptions.insert_one(subscription.model_dump(exclude={"id"}))

    async def insert_playlist(self, playlist: Playlist) -> str:
        return await self.playlists.insert_one(playlist.model_dump(exclude={"id"}))

    # --- single lookups --------------------------------------------------

    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self.users.find_one({"_id": user_id})

    async def get_video(self, video_id: str) -> Optional[Dict[str, Any]]:
        return await self.videos.find_one({"_id": video_id})

    async def get_comment(self, comment_id: str) -> Optional[Dict[str, Any]]:
        return await self.comments.find_one({"_id": comment_id})

    async def get_playlist(self, playlist_id: str) -> Optional[Dict[str, Any]]:
        return await self.playlists.find_one({"_id": playlist_id})

    # --- edges -----------------------------------------------------------

    async def find_like(self, like: Like) -> Optional[Dict[str, Any]]:
        return await self.likes.find_one(like.edge_key())

    async def find_subscription(self, subscription: Subscription) -> Optional[Dict[str, Any]]:
        return await self.subscriptions.find_one(subscription.edge_key())

    # --- ownership -------------------------------------------------------

    async def owned_ids(self, collection: str, owner_id: str) -> List[str]:
        docs = await self.repository(collection).find({"owner": owner_id}, {"_id": 1})
        return [doc["_id"] for doc in docs]
