"""Pydantic schemas for Post and assembled feed items."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tepi.schemas.comment import CommentEntry
from tepi.schemas.profile import ProfileSummary

PostVisibility = str  # "public" | "anonymous"


class PostFile(BaseModel):
    name: str
    url: str
    size: int | None = None


class PostCreate(BaseModel):
    content: str = Field(..., min_length=1)
    images: list[str] | None = None
    files: list[PostFile] | None = None
    visibility: str = Field(default="public", pattern="^(public|anonymous)$")
    community_id: str | None = None


class LikeEntry(BaseModel):
    id: str
    user_id: str

    model_config = {"from_attributes": True}


class FeedCounts(BaseModel):
    likes: int = 0
    comments: int = 0


class FeedItem(BaseModel):
    """A post joined with its author, likes and comments. Rebuilt on every load."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str | None = None  # None when the partition suppresses authors
    content: str
    images: list[str] | None = None
    files: list[PostFile] | None = None
    visibility: PostVisibility = "public"
    community_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    profile: ProfileSummary | None = None
    likes: list[LikeEntry] = Field(default_factory=list)
    comments: list[CommentEntry] = Field(default_factory=list)
    counts: FeedCounts = Field(default_factory=FeedCounts, alias="_count")

    def liked_by(self, user_id: str) -> LikeEntry | None:
        return next((like for like in self.likes if like.user_id == user_id), None)
