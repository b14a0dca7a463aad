"""Feed view: load a section, retry, and like/comment/post mutations."""
from fastapi import APIRouter, Depends, Query, status

from tepi.api.deps import get_feed_state
from tepi.schemas.comment import CommentCreate
from tepi.schemas.feed import FeedResponse
from tepi.schemas.post import PostCreate
from tepi.services.feed_state import FeedState

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=FeedResponse)
async def get_feed(
    section: str | None = Query(None, max_length=100, description="public, anonymous or a community id"),
    state: FeedState = Depends(get_feed_state),
):
    await state.select_section(section)
    return state.snapshot()


@router.post("/retry", response_model=FeedResponse)
async def retry_feed(state: FeedState = Depends(get_feed_state)):
    await state.retry()
    return state.snapshot()


@router.post("/posts", response_model=FeedResponse, status_code=status.HTTP_201_CREATED)
async def create_post_endpoint(
    data: PostCreate,
    state: FeedState = Depends(get_feed_state),
):
    await state.ensure_loaded()
    await state.create_post(data)
    return state.snapshot()


@router.post("/posts/{post_id}/like", response_model=FeedResponse)
async def toggle_like(
    post_id: str,
    state: FeedState = Depends(get_feed_state),
):
    await state.ensure_loaded()
    await state.toggle_like(post_id)
    return state.snapshot()


@router.post("/posts/{post_id}/comments", response_model=FeedResponse)
async def add_comment(
    post_id: str,
    data: CommentCreate,
    state: FeedState = Depends(get_feed_state),
):
    await state.ensure_loaded()
    await state.add_comment(post_id, data.content)
    return state.snapshot()
