"""Pydantic schemas for Comment."""
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from tepi.schemas.profile import ProfileSummary


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment content must not be empty")
        return v.strip()


class CommentEntry(BaseModel):
    id: str
    content: str
    created_at: datetime | None = None
    user_id: str | None = None  # None when the partition suppresses authors
    profile: ProfileSummary | None = None

    model_config = {"from_attributes": True}
