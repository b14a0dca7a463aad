"""Feed queries and assembly of posts into UI-ready feed items."""
import logging
from collections import defaultdict
from collections.abc import Awaitable
from typing import TypeVar

from sqlalchemy import asc, delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tepi.models.comment import Comment
from tepi.models.engagement import Like
from tepi.models.post import Post
from tepi.models.profile import Profile
from tepi.schemas.comment import CommentEntry
from tepi.schemas.post import FeedCounts, FeedItem, LikeEntry, PostCreate
from tepi.schemas.profile import ProfileSummary
from tepi.services.partition import Partition

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FeedLoadError(Exception):
    """The post list for a partition could not be fetched."""


# --- Queries ---

async def get_partition_posts(db: AsyncSession, partition: Partition) -> list[Post]:
    result = await db.execute(
        select(Post)
        .where(partition.where_clause())
        .order_by(desc(Post.created_at), desc(Post.id))
    )
    return list(result.scalars().all())


async def get_profile(db: AsyncSession, user_id: str) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.id == user_id))
    return result.scalar_one_or_none()


async def get_post_likes(db: AsyncSession, post_id: str) -> list[Like]:
    result = await db.execute(
        select(Like).where(Like.post_id == post_id).order_by(asc(Like.created_at), asc(Like.id))
    )
    return list(result.scalars().all())


async def get_post_comments(db: AsyncSession, post_id: str) -> list[Comment]:
    result = await db.execute(
        select(Comment)
        .where(Comment.post_id == post_id)
        .order_by(asc(Comment.created_at), asc(Comment.id))
    )
    return list(result.scalars().all())


async def get_profiles(db: AsyncSession, user_ids: list[str]) -> dict[str, Profile]:
    if not user_ids:
        return {}
    result = await db.execute(select(Profile).where(Profile.id.in_(user_ids)))
    return {p.id: p for p in result.scalars().all()}


async def get_likes_for_posts(db: AsyncSession, post_ids: list[str]) -> dict[str, list[Like]]:
    if not post_ids:
        return {}
    result = await db.execute(
        select(Like).where(Like.post_id.in_(post_ids)).order_by(asc(Like.created_at), asc(Like.id))
    )
    grouped: dict[str, list[Like]] = defaultdict(list)
    for like in result.scalars().all():
        grouped[like.post_id].append(like)
    return grouped


async def get_comments_for_posts(db: AsyncSession, post_ids: list[str]) -> dict[str, list[Comment]]:
    if not post_ids:
        return {}
    result = await db.execute(
        select(Comment)
        .where(Comment.post_id.in_(post_ids))
        .order_by(asc(Comment.created_at), asc(Comment.id))
    )
    grouped: dict[str, list[Comment]] = defaultdict(list)
    for comment in result.scalars().all():
        grouped[comment.post_id].append(comment)
    return grouped


# --- Writes ---

async def create_post(db: AsyncSession, user_id: str, data: PostCreate) -> Post:
    post = Post(
        user_id=user_id,
        content=data.content,
        images=data.images,
        files=[f.model_dump() for f in data.files] if data.files else None,
        visibility=data.visibility or "public",
        community_id=data.community_id,
    )
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


async def create_like(db: AsyncSession, post_id: str, user_id: str) -> Like:
    like = Like(post_id=post_id, user_id=user_id)
    db.add(like)
    await db.flush()
    return like


async def delete_like(db: AsyncSession, like_id: str) -> bool:
    result = await db.execute(delete(Like).where(Like.id == like_id))
    return (result.rowcount or 0) > 0


async def create_comment(db: AsyncSession, post_id: str, user_id: str, content: str) -> Comment:
    comment = Comment(post_id=post_id, user_id=user_id, content=content)
    db.add(comment)
    await db.flush()
    return comment


# --- Assembly ---

def profile_summary(profile: Profile | None) -> ProfileSummary | None:
    return ProfileSummary.model_validate(profile) if profile else None


def build_feed_item(
    post: Post,
    partition: Partition,
    profile: Profile | None,
    likes: list[Like],
    comments: list[tuple[Comment, Profile | None]],
) -> FeedItem:
    suppress = partition.hides_author(post.visibility)
    comment_entries = [
        CommentEntry(
            id=c.id,
            content=c.content,
            created_at=c.created_at,
            user_id=None if suppress else c.user_id,
            profile=None if suppress else profile_summary(p),
        )
        for c, p in comments
    ]
    like_entries = [LikeEntry(id=like.id, user_id=like.user_id) for like in likes]
    return FeedItem(
        id=post.id,
        user_id=None if suppress else post.user_id,
        content=post.content,
        images=post.images,
        files=post.files,
        visibility=post.visibility or partition.section,
        community_id=post.community_id,
        created_at=post.created_at,
        updated_at=post.updated_at,
        profile=None if suppress else profile_summary(profile),
        likes=like_entries,
        comments=comment_entries,
        counts=FeedCounts(likes=len(like_entries), comments=len(comment_entries)),
    )


async def _tolerant(db: AsyncSession, what: str, post_id: str | None, fetch: Awaitable[T], default: T) -> T:
    """Await an enrichment fetch; a failure degrades to `default`.

    Each fetch runs under its own savepoint. A failed statement rolls back
    only that step, so the outer transaction stays usable for the rest of
    the feed (Postgres refuses every later statement otherwise).
    """
    try:
        async with db.begin_nested():
            return await fetch
    except SQLAlchemyError as e:
        logger.warning("%s lookup failed (post %s): %s", what, post_id, e)
        return default


async def _load_posts(db: AsyncSession, partition: Partition) -> list[Post]:
    try:
        return await get_partition_posts(db, partition)
    except SQLAlchemyError as e:
        logger.error("Posts query failed for section %s: %s", partition.section, e)
        raise FeedLoadError(f"Database error: {e}") from e


async def assemble_feed(db: AsyncSession, partition: Partition) -> list[FeedItem]:
    """Build the feed one post at a time, one sub-fetch at a time. Newest first."""
    posts = await _load_posts(db, partition)
    if not posts:
        logger.info("No posts found for section %s", partition.section)
        return []

    items: list[FeedItem] = []
    for post in posts:
        logger.debug("Enriching post %s", post.id)
        hidden = partition.hides_author(post.visibility)
        profile = None
        if not hidden:
            profile = await _tolerant(db, "Profile", post.id, get_profile(db, post.user_id), None)
        likes = await _tolerant(db, "Likes", post.id, get_post_likes(db, post.id), [])
        comments = await _tolerant(db, "Comments", post.id, get_post_comments(db, post.id), [])
        resolved: list[tuple[Comment, Profile | None]] = []
        for comment in comments:
            commenter = None
            if not hidden:
                commenter = await _tolerant(db, "Comment profile", post.id, get_profile(db, comment.user_id), None)
            resolved.append((comment, commenter))
        items.append(build_feed_item(post, partition, profile, likes, resolved))

    logger.info("Loaded %d posts for section %s", len(items), partition.section)
    return items


async def assemble_feed_batched(db: AsyncSession, partition: Partition) -> list[FeedItem]:
    """Same output as assemble_feed(), with one query per relation joined in memory."""
    posts = await _load_posts(db, partition)
    if not posts:
        logger.info("No posts found for section %s", partition.section)
        return []

    post_ids = [p.id for p in posts]
    likes_by_post = await _tolerant(db, "Likes", None, get_likes_for_posts(db, post_ids), {})
    comments_by_post = await _tolerant(db, "Comments", None, get_comments_for_posts(db, post_ids), {})

    profiles: dict[str, Profile] = {}
    shown = [p for p in posts if not partition.hides_author(p.visibility)]
    if shown:
        wanted = {p.user_id for p in shown}
        for post in shown:
            wanted.update(c.user_id for c in comments_by_post.get(post.id, []))
        profiles = await _tolerant(db, "Profile", None, get_profiles(db, sorted(wanted)), {})

    items = []
    for post in posts:
        comments = comments_by_post.get(post.id, [])
        items.append(
            build_feed_item(
                post,
                partition,
                profiles.get(post.user_id),
                likes_by_post.get(post.id, []),
                [(c, profiles.get(c.user_id)) for c in comments],
            )
        )
    logger.info("Loaded %d posts for section %s (batched)", len(items), partition.section)
    return items
