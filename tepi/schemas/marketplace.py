"""Pydantic schemas for marketplace listings."""
from datetime import datetime

from pydantic import BaseModel, Field


class MarketplaceItemResponse(BaseModel):
    id: str
    seller_id: str
    title: str
    description: str = ""
    price: int = 0
    price_display: str | None = None
    category: str = "other"
    images: list[str] | None = None
    location: str | None = None
    status: str = "available"
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class MarketplaceListResponse(BaseModel):
    categories: list[str]
    search: str = ""
    category: str = "all"
    items: list[MarketplaceItemResponse] = Field(default_factory=list)
