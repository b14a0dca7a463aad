"""Feed view schemas."""
from typing import Literal

from pydantic import BaseModel, Field

from tepi.schemas.post import FeedItem

FeedStatus = Literal["loading", "error", "empty", "ready"]


class EmptyState(BaseModel):
    title: str
    message: str


class FeedResponse(BaseModel):
    section: str
    status: FeedStatus
    loading: bool = False
    error: str | None = None
    notice: str | None = None
    mode: Literal["live", "demo"] = "demo"
    posts: list[FeedItem] = Field(default_factory=list)
    empty_state: EmptyState | None = None
