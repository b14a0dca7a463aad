"""Marketplace listings: flat fetch plus search/category filtering."""
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from tepi.models.marketplace import MarketplaceItem
from tepi.schemas.marketplace import MarketplaceItemResponse

ALL_CATEGORIES = "all"
CATEGORIES = [
    ALL_CATEGORIES,
    "electronics",
    "clothing",
    "home",
    "books",
    "sports",
    "automotive",
    "other",
]


async def get_marketplace_items(db: AsyncSession) -> list[MarketplaceItem]:
    result = await db.execute(select(MarketplaceItem).order_by(desc(MarketplaceItem.created_at)))
    return list(result.scalars().all())


def format_price(price: int) -> str:
    """KRW has no minor unit: 45000 -> '₩45,000'."""
    return f"₩{price:,}"


def item_to_response(item: MarketplaceItem) -> MarketplaceItemResponse:
    response = MarketplaceItemResponse.model_validate(item)
    response.description = response.description or ""
    return response


def filter_items(
    items: list[MarketplaceItemResponse],
    search: str = "",
    category: str = ALL_CATEGORIES,
) -> list[MarketplaceItemResponse]:
    """Case-insensitive match on title or description, AND the selected category."""
    term = (search or "").lower()
    category = category or ALL_CATEGORIES
    filtered = []
    for item in items:
        matches_search = term in item.title.lower() or term in (item.description or "").lower()
        matches_category = category == ALL_CATEGORIES or item.category == category
        if matches_search and matches_category:
            filtered.append(item.model_copy(update={"price_display": format_price(item.price)}))
    return filtered
