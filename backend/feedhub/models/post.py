# FILE: backend/feedhub/models/post.py

from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import datetime, timezone
from .common import PyObjectId

class PostInput(BaseModel):
    title: str = Field(..., min_length=5)
    content: str = Field(..., min_length=5)
    image_url: str = Field(..., min_length=1)

    @field_validator("title", "content", "image_url", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v

class PostInDB(BaseModel):
    id: PyObjectId = Field(alias="_id", default=None)
    title: str
    content: str
    image_url: str
    creator: PyObjectId
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )
