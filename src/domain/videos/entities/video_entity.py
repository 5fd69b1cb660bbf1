from datetime import datetime, UTC
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field


class Video(BaseModel):
    id: Optional[str] = None
    title: str
    description: str
    video_file: str  # public URL returned by the media store
    thumbnail: str
    duration: float = 0
    views: int = 0
    is_published: bool = True
    owner: str

    created_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    updated_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())

    indexes: ClassVar[List[dict]] = [
        {"fields": ["owner"]},
        {"fields": ["created_at"]},
    ]
