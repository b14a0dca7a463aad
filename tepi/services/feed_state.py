"""Per-viewer feed state: the selected section, its items and the loading/error flags."""
import asyncio
import logging
from collections import OrderedDict

from tepi.schemas.feed import EmptyState, FeedResponse
from tepi.schemas.post import FeedItem, PostCreate
from tepi.services.feed_service import FeedLoadError
from tepi.services.partition import ANONYMOUS, Partition, resolve_partition
from tepi.services.providers import FeedProvider, MutationOutcome

logger = logging.getLogger(__name__)

EMPTY_ANONYMOUS = EmptyState(
    title="No anonymous posts yet",
    message="Share your thoughts anonymously - no usernames, just pure content!",
)
EMPTY_DEFAULT = EmptyState(
    title="No public posts yet",
    message="Be the first to share something with the community!",
)


class FeedState:
    """State owned by one viewer. Items are only ever replaced wholesale.

    Operations are serialised by a lock so a reload never interleaves with
    another operation on the same state.
    """

    def __init__(self, provider: FeedProvider, user_id: str, section: str | None = None):
        self.provider = provider
        self.user_id = user_id
        self.partition: Partition = resolve_partition(section)
        self.posts: list[FeedItem] = []
        self.loading = False
        self.loaded = False
        self.error: str | None = None
        self.notice: str | None = None
        self._lock = asyncio.Lock()

    @property
    def section(self) -> str:
        return self.partition.section

    @property
    def status(self) -> str:
        if self.loading:
            return "loading"
        if self.error:
            return "error"
        if not self.posts:
            return "empty"
        return "ready"

    @property
    def empty_state(self) -> EmptyState | None:
        if self.status != "empty":
            return None
        return EMPTY_ANONYMOUS if self.partition.kind == ANONYMOUS else EMPTY_DEFAULT

    def snapshot(self) -> FeedResponse:
        return FeedResponse(
            section=self.section,
            status=self.status,
            loading=self.loading,
            error=self.error,
            notice=self.notice,
            mode=self.provider.mode or "demo",
            posts=list(self.posts),
            empty_state=self.empty_state,
        )

    async def _load(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.posts = await self.provider.load(self.partition)
        except FeedLoadError as e:
            self.posts = []
            self.error = str(e)
        except Exception as e:
            logger.exception("Error loading posts for section %s", self.section)
            self.posts = []
            self.error = f"Failed to load posts: {e}"
        finally:
            self.loading = False
            self.loaded = True

    async def load(self) -> None:
        async with self._lock:
            await self._load()

    async def retry(self) -> None:
        """Manual retry: reload the current section from scratch."""
        await self.load()

    async def select_section(self, section: str | None) -> None:
        """Switch partitions. Items are discarded and reloaded on any change."""
        partition = resolve_partition(section)
        async with self._lock:
            if partition == self.partition and self.loaded:
                return
            self.partition = partition
            self.notice = None
            await self._load()

    async def _apply(self, outcome: MutationOutcome) -> None:
        self.notice = outcome.notice
        if outcome.reload:
            await self._load()
        else:
            self.posts = outcome.posts

    async def toggle_like(self, post_id: str) -> None:
        async with self._lock:
            outcome = await self.provider.toggle_like(self.posts, self.partition, post_id, self.user_id)
            await self._apply(outcome)

    async def add_comment(self, post_id: str, content: str) -> None:
        content = content.strip()
        if not content:
            raise ValueError("Comment content must not be empty")
        async with self._lock:
            outcome = await self.provider.add_comment(self.posts, self.partition, post_id, self.user_id, content)
            await self._apply(outcome)

    def _scoped(self, data: PostCreate) -> PostCreate:
        """Posts land in the section being viewed unless the caller said otherwise."""
        update = {}
        if "visibility" not in data.model_fields_set and self.partition.kind == ANONYMOUS:
            update["visibility"] = ANONYMOUS
        if "community_id" not in data.model_fields_set and self.partition.community_id:
            update["community_id"] = self.partition.community_id
        return data.model_copy(update=update) if update else data

    async def ensure_loaded(self) -> None:
        if not self.loaded:
            await self.load()

    async def create_post(self, data: PostCreate) -> None:
        data = self._scoped(data)
        async with self._lock:
            outcome = await self.provider.create_post(self.posts, self.partition, self.user_id, data)
            await self._apply(outcome)


class FeedStateRegistry:
    """One FeedState per acting user, all sharing the provider chosen at startup.

    At most `max_viewers` states are held; the least recently used one is
    dropped first and is rebuilt from a fresh load if that viewer returns.
    """

    def __init__(self, provider: FeedProvider, max_viewers: int = 1000):
        self.provider = provider
        self.max_viewers = max(1, max_viewers)
        self._states: OrderedDict[str, FeedState] = OrderedDict()

    def get(self, user_id: str) -> FeedState:
        state = self._states.get(user_id)
        if state is None:
            state = FeedState(self.provider, user_id)
            self._states[user_id] = state
            while len(self._states) > self.max_viewers:
                evicted, _ = self._states.popitem(last=False)
                logger.debug("Evicted feed state for %s", evicted)
        else:
            self._states.move_to_end(user_id)
        return state

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._states

    def __len__(self) -> int:
        return len(self._states)
