from datetime import datetime, UTC
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field


class Comment(BaseModel):
    id: Optional[str] = None
    content: str
    video: str
    owner: str

    created_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    updated_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())

    indexes: ClassVar[List[dict]] = [
        {"fields": ["video", "created_at"]},
        {"fields": ["owner"]},
    ]
