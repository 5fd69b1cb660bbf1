from datetime import datetime, UTC
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field


class Subscription(BaseModel):
    id: Optional[str] = None
    subscriber: str  # user who subscribes
    channel: str  # user being subscribed to

    created_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    updated_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())

    indexes: ClassVar[List[dict]] = [
        {"fields": ["subscriber", "channel"], "unique": True},
        {"fields": ["channel"]},
    ]

    def edge_key(self) -> dict:
        return {"subscriber": self.subscriber, "channel": self.channel}
