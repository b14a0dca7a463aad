"""Pydantic schemas for Profile."""
from pydantic import BaseModel


class ProfileSummary(BaseModel):
    """The subset of a profile shown next to posts and comments."""
    id: str
    username: str | None = None
    display_name: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None

    model_config = {"from_attributes": True}
