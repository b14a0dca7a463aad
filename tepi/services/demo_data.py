"""Fixed sample content served when no database is configured."""
from datetime import datetime, timedelta

from tepi.core.config import settings
from tepi.db.session import utcnow
from tepi.schemas.marketplace import MarketplaceItemResponse
from tepi.schemas.post import FeedCounts, FeedItem
from tepi.schemas.profile import ProfileSummary
from tepi.services.partition import ANONYMOUS, PUBLIC, Partition

def _public_posts(now: datetime) -> list[FeedItem]:
    # Owned by the demo acting user so its own post shows as theirs
    author_id = settings.DEMO_USER_ID
    created = now - timedelta(minutes=30)
    return [
        FeedItem(
            id="1",
            user_id=author_id,
            content=(
                "Welcome to our social platform! \U0001F389 This is a demo post to show how the feed works. "
                "Feel free to interact with it!"
            ),
            images=["https://images.pexels.com/photos/1591056/pexels-photo-1591056.jpeg?auto=compress&cs=tinysrgb&w=800"],
            files=[],
            visibility=PUBLIC,
            created_at=created,
            updated_at=created,
            profile=ProfileSummary(id=author_id, username="demouser", full_name="Demo User"),
            # Display counts only; the sample likes and comments lists stay empty
            counts=FeedCounts(likes=5, comments=2),
        )
    ]


def _anonymous_posts(now: datetime) -> list[FeedItem]:
    created = now - timedelta(minutes=45)
    return [
        FeedItem(
            id="2",
            content=(
                "This is an anonymous post. You can share your thoughts freely without revealing your identity. "
                "Perfect for sensitive topics or when you want complete privacy."
            ),
            visibility=ANONYMOUS,
            created_at=created,
            updated_at=created,
            counts=FeedCounts(likes=3, comments=1),
        )
    ]


def demo_feed(partition: Partition, now: datetime | None = None) -> list[FeedItem]:
    """Fresh copies on every call; community sections have no samples."""
    now = now or utcnow()
    samples = _public_posts(now) + _anonymous_posts(now)
    return [item for item in samples if partition.matches(item.visibility, item.community_id)]


def demo_marketplace_items(now: datetime | None = None) -> list[MarketplaceItemResponse]:
    now = now or utcnow()
    return [
        MarketplaceItemResponse(
            id="m1",
            seller_id=settings.DEMO_USER_ID,
            title="Used mechanical keyboard",
            description="Brown switches, barely used. Comes with the original box.",
            price=45000,
            category="electronics",
            location="Seoul",
            created_at=now - timedelta(hours=2),
        ),
        MarketplaceItemResponse(
            id="m2",
            seller_id="demo-user-2",
            title="The Power of Now (paperback)",
            description="Good condition, a few highlighted pages.",
            price=8000,
            category="books",
            location="Busan",
            created_at=now - timedelta(days=1),
        ),
    ]
