from datetime import datetime, UTC
from enum import Enum
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field, model_validator


class LikeTargetType(str, Enum):
    VIDEO = "video"
    COMMENT = "comment"


class Like(BaseModel):
    id: Optional[str] = None
    liked_by: str
    # exactly one of video / comment is set; the other is stored as null
    video: Optional[str] = None
    comment: Optional[str] = None

    created_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    updated_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())

    indexes: ClassVar[List[dict]] = [
        {"fields": ["liked_by", "video", "comment"], "unique": True},
        {"fields": ["video"]},
        {"fields": ["comment"]},
    ]

    @model_validator(mode="after")
    def _single_target(self):
        if (self.video is None) == (self.comment is None):
            raise ValueError("A like targets exactly one video or one comment")
        return self

    @classmethod
    def for_target(cls, liked_by: str, target_type: LikeTargetType, target_id: str) -> "Like":
        return cls(liked_by=liked_by, **{target_type.value: target_id})

    @property
    def target_type(self) -> LikeTargetType:
        return LikeTargetType.VIDEO if self.video is not None else LikeTargetType.COMMENT

    def edge_key(self) -> dict:
        return {"liked_by": self.liked_by, "video": self.video, "comment": self.comment}
