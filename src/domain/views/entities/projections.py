from typing import List, Optional

from pydantic import BaseModel, Field


class UserSummary(BaseModel):
    id: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar: Optional[str] = None


class VideoCard(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    video_file: Optional[str] = None
    thumbnail: Optional[str] = None
    duration: float = 0
    views: int = 0
    is_published: bool = True
    owner: Optional[UserSummary] = None
    created_at: Optional[str] = None


class VideoDetail(VideoCard):
    updated_at: Optional[str] = None


class ChannelVideo(BaseModel):
    id: str
    title: str
    video_file: Optional[str] = None
    thumbnail: Optional[str] = None
    duration: float = 0
    views: int = 0
    is_published: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CommentView(BaseModel):
    id: str
    content: str
    video: str
    owner: Optional[UserSummary] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LikedVideo(BaseModel):
    like_id: str
    liked_at: Optional[str] = None
    video: VideoCard


class SubscriberView(BaseModel):
    subscription_id: str
    subscriber: Optional[UserSummary] = None
    subscribed_at: Optional[str] = None


class SubscribedChannelView(BaseModel):
    subscription_id: str
    channel: Optional[UserSummary] = None
    subscribed_at: Optional[str] = None


class PlaylistView(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    owner: Optional[UserSummary] = None
    videos: List[VideoCard] = Field(default_factory=list)
    video_count: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
