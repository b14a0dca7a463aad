"""Backend providers: live database or static demo data, chosen once at startup."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tepi.core.config import Settings, has_valid_backend_config
from tepi.db.session import build_engine, build_session_maker, display_url, ping, session_scope
from tepi.schemas.marketplace import MarketplaceItemResponse
from tepi.schemas.post import FeedItem, LikeEntry, PostCreate
from tepi.services.demo_data import demo_feed, demo_marketplace_items
from tepi.services.feed_service import (
    assemble_feed,
    assemble_feed_batched,
    create_comment,
    create_like,
    create_post as create_post_svc,
    delete_like,
)
from tepi.services.marketplace_service import get_marketplace_items, item_to_response
from tepi.services.partition import Partition

logger = logging.getLogger(__name__)

DEMO_COMMENT_NOTICE = "Comment added! (Demo mode)"
DEMO_POST_NOTICE = "Post created! (Demo mode)"


@dataclass
class MutationOutcome:
    """What the feed should show after a mutation.

    reload=True means the posts field is meaningless and the partition must
    be loaded again from the provider.
    """
    posts: list[FeedItem] = field(default_factory=list)
    reload: bool = False
    notice: str | None = None


class FeedProvider(ABC):
    mode: str = ""

    @abstractmethod
    async def load(self, partition: Partition) -> list[FeedItem]:
        """Assembled feed items for the partition, newest first."""

    @abstractmethod
    async def toggle_like(
        self, posts: list[FeedItem], partition: Partition, post_id: str, user_id: str
    ) -> MutationOutcome:
        ...

    @abstractmethod
    async def add_comment(
        self, posts: list[FeedItem], partition: Partition, post_id: str, user_id: str, content: str
    ) -> MutationOutcome:
        ...

    @abstractmethod
    async def create_post(
        self, posts: list[FeedItem], partition: Partition, user_id: str, data: PostCreate
    ) -> MutationOutcome:
        ...

    @abstractmethod
    async def list_marketplace_items(self) -> list[MarketplaceItemResponse]:
        ...

    async def ready(self) -> dict:
        return {"status": "ok", "mode": self.mode}

    async def close(self) -> None:
        return None


class StaticFeedProvider(FeedProvider):
    """Serves fixed samples. Mutations only patch the caller's in-memory items."""
    mode = "demo"

    async def load(self, partition: Partition) -> list[FeedItem]:
        logger.info("Using demo data for section %s - database not configured", partition.section)
        return demo_feed(partition)

    async def toggle_like(self, posts, partition, post_id, user_id):
        patched = []
        for post in posts:
            if post.id != post_id:
                patched.append(post)
                continue
            existing = post.liked_by(user_id)
            if existing:
                likes = [like for like in post.likes if like.id != existing.id]
                delta = -1
            else:
                likes = [*post.likes, LikeEntry(id=f"local-{post_id}-{user_id}", user_id=user_id)]
                delta = 1
            counts = post.counts.model_copy(update={"likes": max(0, post.counts.likes + delta)})
            patched.append(post.model_copy(update={"likes": likes, "counts": counts}))
        return MutationOutcome(posts=patched)

    async def add_comment(self, posts, partition, post_id, user_id, content):
        return MutationOutcome(posts=list(posts), notice=DEMO_COMMENT_NOTICE)

    async def create_post(self, posts, partition, user_id, data):
        return MutationOutcome(posts=list(posts), notice=DEMO_POST_NOTICE)

    async def list_marketplace_items(self):
        return demo_marketplace_items()


class LiveFeedProvider(FeedProvider):
    """Reads and writes through the database; every mutation asks for a full reload."""
    mode = "live"

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        *,
        batched: bool = False,
        engine: AsyncEngine | None = None,
    ):
        self.session_maker = session_maker
        self.batched = batched
        self.engine = engine

    async def load(self, partition: Partition) -> list[FeedItem]:
        assemble = assemble_feed_batched if self.batched else assemble_feed
        async with self.session_maker() as db:
            return await assemble(db, partition)

    async def toggle_like(self, posts, partition, post_id, user_id):
        post = next((p for p in posts if p.id == post_id), None)
        existing = post.liked_by(user_id) if post else None
        try:
            async with session_scope(self.session_maker) as db:
                if existing:
                    await delete_like(db, existing.id)
                else:
                    await create_like(db, post_id, user_id)
        except SQLAlchemyError:
            # TODO: surface a transient failure notice to the viewer
            logger.exception("Error toggling like on post %s", post_id)
        return MutationOutcome(reload=True)

    async def add_comment(self, posts, partition, post_id, user_id, content):
        try:
            async with session_scope(self.session_maker) as db:
                await create_comment(db, post_id, user_id, content)
        except SQLAlchemyError:
            logger.exception("Error adding comment to post %s", post_id)
        return MutationOutcome(reload=True)

    async def create_post(self, posts, partition, user_id, data):
        try:
            async with session_scope(self.session_maker) as db:
                await create_post_svc(db, user_id, data)
        except SQLAlchemyError:
            logger.exception("Error creating post for user %s", user_id)
        return MutationOutcome(reload=True)

    async def list_marketplace_items(self):
        try:
            async with self.session_maker() as db:
                items = await get_marketplace_items(db)
        except SQLAlchemyError:
            logger.exception("Error loading marketplace items")
            return []
        return [item_to_response(i) for i in items]

    async def ready(self) -> dict:
        if self.engine is None:
            return await super().ready()
        try:
            await ping(self.engine)
            return {"status": "ok", "mode": self.mode, "database": "connected"}
        except Exception as e:
            return {"status": "error", "mode": self.mode, "database": str(e)}

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


async def select_provider(settings: Settings) -> FeedProvider:
    """Pick the provider once; an unconfigured or unreachable database means demo mode."""
    if not has_valid_backend_config(settings):
        logger.info("Database not configured - serving demo data")
        return StaticFeedProvider()
    engine = build_engine(settings.DATABASE_URL)
    try:
        await ping(engine)
    except Exception as e:
        logger.warning("Database at %s unreachable, serving demo data: %s", display_url(settings.DATABASE_URL), e)
        await engine.dispose()
        return StaticFeedProvider()
    logger.info("Database: OK (batched enrichment=%s)", settings.FEED_BATCHED_ENRICHMENT)
    return LiveFeedProvider(
        build_session_maker(engine),
        batched=settings.FEED_BATCHED_ENRICHMENT,
        engine=engine,
    )
