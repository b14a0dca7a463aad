from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from tepi.core.security import create_access_token
from tepi.db.base import Base
from tepi.db.session import build_session_maker
from tepi.main import app
from tepi.models import Comment, Community, Like, MarketplaceItem, Post, Profile
from tepi.services.feed_state import FeedStateRegistry
from tepi.services.providers import LiveFeedProvider, StaticFeedProvider

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def at(**delta) -> datetime:
    return BASE_TIME - timedelta(**delta)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest.fixture
async def seeded(session_maker):
    """Three public posts (one by an author with no profile), one anonymous, one community post."""
    async with session_maker() as db:
        db.add_all([
            Profile(id="u-alice", username="alice", full_name="Alice Kim", display_name="alice"),
            Profile(id="u-bob", username="bob", full_name="Bob Lee"),
            Profile(id="u-carol", username="carol", full_name="Carol Park"),
            Community(id="c-cars", name="Cars", created_by="u-alice"),
        ])
        db.add_all([
            Post(id="p-pub-old", user_id="u-alice", content="older public", visibility="public", created_at=at(hours=2)),
            Post(id="p-pub-new", user_id="u-bob", content="newer public", visibility="public", created_at=at(hours=1)),
            Post(id="p-pub-ghost", user_id="u-ghost", content="author gone", visibility="public", created_at=at(hours=3)),
            Post(id="p-anon", user_id="u-carol", content="a secret", visibility="anonymous", created_at=at(minutes=30)),
            Post(
                id="p-comm",
                user_id="u-alice",
                content="new wheels",
                visibility="public",
                community_id="c-cars",
                created_at=at(minutes=10),
            ),
        ])
        db.add_all([
            Like(id="l-1", post_id="p-pub-new", user_id="u-alice", created_at=at(minutes=55)),
            Like(id="l-2", post_id="p-pub-new", user_id="u-carol", created_at=at(minutes=54)),
            Like(id="l-3", post_id="p-pub-old", user_id="u-bob", created_at=at(minutes=53)),
            Like(id="l-4", post_id="p-anon", user_id="u-alice", created_at=at(minutes=25)),
            Comment(id="c-1", post_id="p-pub-new", user_id="u-alice", content="first!", created_at=at(minutes=50)),
            Comment(id="c-2", post_id="p-pub-new", user_id="u-carol", content="second", created_at=at(minutes=40)),
            Comment(id="c-3", post_id="p-anon", user_id="u-alice", content="hugs", created_at=at(minutes=20)),
            Comment(id="c-4", post_id="p-anon", user_id="u-bob", content="same here", created_at=at(minutes=15)),
            MarketplaceItem(
                id="m-1",
                seller_id="u-bob",
                title="Winter tyres",
                description="Four tyres, one season old",
                price=320000,
                category="automotive",
                created_at=at(hours=5),
            ),
            MarketplaceItem(
                id="m-2",
                seller_id="u-carol",
                title="Desk lamp",
                description="Warm light, works fine",
                price=15000,
                category="home",
                created_at=at(hours=4),
            ),
        ])
        await db.commit()
    return session_maker


@pytest.fixture
def live_provider(seeded):
    return LiveFeedProvider(seeded)


@pytest.fixture
def static_provider():
    return StaticFeedProvider()


def _install(provider):
    app.state.provider = provider
    app.state.feed_states = FeedStateRegistry(provider)


@pytest.fixture
async def demo_client(static_provider):
    _install(static_provider)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def live_client(live_provider):
    _install(live_provider)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers():
    def make(user_id: str = "u-alice") -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return make
