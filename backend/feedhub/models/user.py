# FILE: backend/feedhub/models/user.py

from pydantic import BaseModel, Field, EmailStr, ConfigDict, field_validator
from typing import Optional
from datetime import datetime, timezone
from .common import PyObjectId

DEFAULT_STATUS = "I am new!"

# Model for creating a new user (createUser mutation input)
class UserCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=5)

    @field_validator("name", "password", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v

# Model stored in DB (includes hashed password)
class UserInDB(BaseModel):
    id: PyObjectId = Field(alias="_id", default=None)
    email: str
    name: str
    password: str
    status: str = DEFAULT_STATUS
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

# Model for updating the status line
class UserStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1)

    @field_validator("status", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v
