from datetime import datetime, UTC
from typing import Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    id: Optional[str] = None
    username: str
    full_name: str
    avatar: Optional[str] = None  # public URL
    cover_image: Optional[str] = None
    email: Optional[str] = None

    created_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    updated_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
