from pydantic import BaseModel


class ChannelStats(BaseModel):
    total_views: int = 0
    total_videos: int = 0
    total_subscribers: int = 0
    total_likes: int = 0
