from datetime import datetime, UTC
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field


class Playlist(BaseModel):
    id: Optional[str] = None
    name: str
    description: str
    owner: str
    videos: List[str] = Field(default_factory=list)  # ordered, no duplicates

    created_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    updated_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())

    indexes: ClassVar[List[dict]] = [
        {"fields": ["owner", "name"]},
    ]
