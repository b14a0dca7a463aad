"""Seed the configured database with the sample feed (run after `alembic upgrade head`)."""
import asyncio
import logging
import os
import sys
from datetime import timedelta

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import func, select

from tepi.core.config import has_valid_backend_config, settings
from tepi.core.logging import configure_logging
from tepi.db.session import build_engine, build_session_maker, utcnow
from tepi.models import Comment, Like, MarketplaceItem, Post, Profile

logger = logging.getLogger("seed_demo")


async def seed():
    if not has_valid_backend_config(settings):
        logger.error("DATABASE_URL is not configured; nothing to seed.")
        return
    engine = build_engine()
    session_maker = build_session_maker(engine)
    async with session_maker() as db:
        existing = await db.scalar(select(func.count(Post.id)))
        if existing:
            logger.info("Database already has %d posts; skipping.", existing)
            await engine.dispose()
            return

        now = utcnow()
        demo = Profile(id="demo-user-123", username="demouser", full_name="Demo User", email="demo@example.com")
        nature = Profile(id="demo-user-2", username="naturelover", full_name="Nature Lover")
        reader = Profile(id="demo-user-3", username="booklover", full_name="Book Reader")
        db.add_all([demo, nature, reader])

        welcome = Post(
            user_id=demo.id,
            content="Welcome to our social platform! This is the first post in the feed.",
            images=["https://images.pexels.com/photos/1591056/pexels-photo-1591056.jpeg?auto=compress&cs=tinysrgb&w=800"],
            visibility="public",
            created_at=now - timedelta(minutes=30),
        )
        sunset = Post(
            user_id=nature.id,
            content="Beautiful sunset today! Sometimes we need to pause and appreciate the simple moments in life.",
            visibility="public",
            created_at=now - timedelta(hours=2),
        )
        secret = Post(
            user_id=reader.id,
            content="Sharing this anonymously - sometimes it's easier to express thoughts without revealing identity.",
            visibility="anonymous",
            created_at=now - timedelta(minutes=45),
        )
        db.add_all([welcome, sunset, secret])
        await db.flush()

        db.add_all([
            Like(post_id=welcome.id, user_id=nature.id),
            Like(post_id=welcome.id, user_id=reader.id),
            Like(post_id=secret.id, user_id=demo.id),
            Comment(post_id=welcome.id, user_id=nature.id, content="Glad to be here!", created_at=now - timedelta(minutes=20)),
            Comment(post_id=secret.id, user_id=demo.id, content="Thanks for sharing.", created_at=now - timedelta(minutes=10)),
            MarketplaceItem(
                seller_id=reader.id,
                title="The Power of Now (paperback)",
                description="Good condition, a few highlighted pages.",
                price=8000,
                category="books",
            ),
        ])
        await db.commit()
        logger.info("Seeded 3 profiles, 3 posts and 1 marketplace listing.")
    await engine.dispose()


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(seed())
