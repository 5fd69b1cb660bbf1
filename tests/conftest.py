"""Pytest configuration and shared fixtures"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

from domain.comments.entities.comment_entity import Comment
from domain.playlists.entities.playlist_entity import Playlist
from domain.users.entities.user_entity import User
from domain.videos.entities.video_entity import Video
from infrastructure.database.mongodb.indexes import ensure_indexes
from infrastructure.database.mongodb.repositories.entity_store import EntityStore
from infrastructure.external.media.cloudinary_client import MediaUploader, MediaUploadResult

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def timestamp(offset_minutes: int = 0) -> str:
    """ISO timestamp at a fixed offset from BASE_TIME, so sort order is predictable"""
    return (BASE_TIME + timedelta(minutes=offset_minutes)).isoformat()


@pytest.fixture
def mongo_db():
    """Fresh in-memory database per test"""
    return AsyncMongoMockClient()["vidgraph_test"]


@pytest_asyncio.fixture
async def store(mongo_db):
    """Entity store over the mock database with all indexes in place"""
    await ensure_indexes(mongo_db)
    return EntityStore(mongo_db)


@pytest.fixture
def seed(store):
    """Factory helpers for building a small content graph"""

    class Seeder:
        async def user(self, username: str = "alice", **overrides) -> str:
            data = {"username": username, "full_name": username.title(), "avatar": f"https://img.test/{username}.png"}
            data.update(overrides)
            return await store.insert_user(User(**data))

        async def video(self, owner: str, title: str = "A video", minute: int = 0, **overrides) -> str:
            data = {
                "title": title,
                "description": f"About {title}",
                "video_file": "https://media.test/video.mp4",
                "thumbnail": "https://media.test/thumb.png",
                "duration": 12.5,
                "owner": owner,
                "created_at": timestamp(minute),
                "updated_at": timestamp(minute),
            }
            data.update(overrides)
            return await store.insert_video(Video(**data))

        async def comment(self, owner: str, video: str, content: str = "Nice!", minute: int = 0) -> str:
            return await store.insert_comment(Comment(content=content, video=video, owner=owner, created_at=timestamp(minute)))

        async def playlist(self, owner: str, name: str = "Favourites", videos=None) -> str:
            return await store.insert_playlist(Playlist(name=name, description="Saved videos", owner=owner, videos=list(videos or [])))

    return Seeder()


@pytest.fixture
def mock_uploader():
    """Media uploader that hands back a predictable URL per staged file"""
    uploader = AsyncMock(spec=MediaUploader)

    async def fake_upload(local_path):
        name = str(local_path).rsplit("/", 1)[-1]
        return MediaUploadResult(url=f"https://media.test/{name}", duration=42.0, public_id=name)

    uploader.upload.side_effect = fake_upload
    return uploader
