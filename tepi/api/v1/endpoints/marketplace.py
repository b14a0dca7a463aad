"""Marketplace listings with search and category filter."""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from tepi.api.deps import get_current_user_id, get_provider
from tepi.schemas.marketplace import MarketplaceListResponse
from tepi.services.marketplace_service import ALL_CATEGORIES, CATEGORIES, filter_items
from tepi.services.providers import FeedProvider

router = APIRouter(prefix="/marketplace", tags=["marketplace"])


@router.get("", response_model=MarketplaceListResponse)
async def list_items(
    search: str = Query("", max_length=100),
    category: str = Query(ALL_CATEGORIES),
    _user_id: str = Depends(get_current_user_id),
    provider: FeedProvider = Depends(get_provider),
):
    if category not in CATEGORIES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown category: {category}")
    items = await provider.list_marketplace_items()
    return MarketplaceListResponse(
        categories=CATEGORIES,
        search=search,
        category=category,
        items=filter_items(items, search, category),
    )
