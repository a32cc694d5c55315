"""Realtime feed buffer for one connected viewer.

New posts from other users are staged, never pushed into the displayed
list. The viewer merges them explicitly, so the list never shifts under a
reader mid-scroll.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from uuid import UUID

import logfire
from dishka import AsyncContainer

from simskut.domain.model import FeedPostView
from simskut.domain.service import ChangeEvent, ChangeFeed, FeedService, Subscription
from simskut.domain.value import PostId, UserId

FEED_TABLE = "feed_posts"

ChangeListener = Callable[[], Awaitable[None]]


class FeedSource(ABC):
    """Reads joined posts for the buffer."""

    @abstractmethod
    async def fetch_post(self, post_id: PostId, viewer_id: UserId) -> FeedPostView | None:
        """Fully joined post, or None if it is gone."""
        pass

    @abstractmethod
    async def fetch_page(
        self, viewer_id: UserId, limit: int, offset: int
    ) -> list[FeedPostView]:
        """A page of the feed, newest first."""
        pass


class ContainerFeedSource(FeedSource):
    """Feed source opening a fresh request scope per read.

    Long-lived connections must not hold one database session open.
    """

    def __init__(self, container: AsyncContainer) -> None:
        """Initialize feed source.

        Args:
            container: Application container
        """
        self.container = container

    async def fetch_post(self, post_id: PostId, viewer_id: UserId) -> FeedPostView | None:
        async with self.container() as scoped:
            feed_service = await scoped.get(FeedService)
            return await feed_service.get_post_view(post_id, viewer_id)

    async def fetch_page(
        self, viewer_id: UserId, limit: int, offset: int
    ) -> list[FeedPostView]:
        async with self.container() as scoped:
            feed_service = await scoped.get(FeedService)
            return await feed_service.list_posts(viewer_id, limit, offset)


class FeedBuffer:
    """Displayed posts plus the staged posts not yet shown.

    Invariants:
    - A post id appears at most once across displayed and staged.
    - Posts authored by the viewer never enter staged; the composer already
      shows them.
    - Only merge_pending moves staged posts into displayed.
    """

    def __init__(
        self,
        change_feed: ChangeFeed,
        source: FeedSource,
        viewer_id: UserId,
        page_size: int,
        on_change: ChangeListener | None = None,
    ) -> None:
        """Initialize feed buffer.

        Args:
            change_feed: Stream of committed row changes
            source: Reader for joined posts
            viewer_id: User looking at the feed
            page_size: Posts per page
            on_change: Awaited whenever the staged count changes
        """
        self.change_feed = change_feed
        self.source = source
        self.viewer_id = viewer_id
        self.page_size = page_size
        self.on_change = on_change
        self.displayed: list[FeedPostView] = []
        self.staged: list[FeedPostView] = []
        self.has_more = True
        self._loading = False
        # Bumped on reload; pages fetched for an older generation are dropped
        self._generation = 0
        self._subscription: Subscription | None = None
        self._closed = False

    @property
    def pending_count(self) -> int:
        """Number of staged posts."""
        return len(self.staged)

    @property
    def subscribed(self) -> bool:
        """Whether the buffer currently listens for inserts."""
        return self._subscription is not None and not self._subscription.closed

    def _known(self, post_id: PostId) -> bool:
        return any(v.post.id == post_id for v in self.displayed) or any(
            v.post.id == post_id for v in self.staged
        )

    def start(self) -> None:
        """Subscribe to post inserts."""
        if self._closed or self.subscribed:
            return
        self._subscription = self.change_feed.subscribe(
            FEED_TABLE, "INSERT", self._on_insert
        )
        logfire.info("Feed buffer subscribed", viewer_id=str(self.viewer_id))

    async def _on_insert(self, change: ChangeEvent) -> None:
        if self._closed:
            return
        record = change.record
        if str(record.get("author_id")) == str(self.viewer_id):
            return
        try:
            post_id = PostId(UUID(str(record["id"])))
        except (KeyError, ValueError):
            logfire.warn("Post insert without a valid id", record=record)
            return
        if self._known(post_id):
            return

        view = await self.source.fetch_post(post_id, self.viewer_id)
        # The buffer may have closed or seen the post while fetching
        if view is None or self._closed or self._known(post_id):
            return

        self.staged.append(view)
        logfire.debug(
            "Post staged", post_id=str(post_id), pending=len(self.staged)
        )
        if self.on_change is not None:
            await self.on_change()

    async def load_initial(self) -> list[FeedPostView]:
        """Replace the displayed list with the first page.

        A load still in flight is abandoned and its page discarded.
        """
        self._generation += 1
        self._loading = False
        self.displayed = []
        self.has_more = True
        return await self.load_more()

    async def load_more(self) -> list[FeedPostView]:
        """Append the next page to the displayed list.

        Returns:
            Newly displayed posts; empty if a load is in flight or the feed
            is exhausted
        """
        if self._loading or not self.has_more or self._closed:
            return []
        self._loading = True
        generation = self._generation
        try:
            page = await self.source.fetch_page(
                self.viewer_id, self.page_size, len(self.displayed)
            )
        finally:
            if generation == self._generation:
                self._loading = False
        if generation != self._generation or self._closed:
            return []

        if len(page) < self.page_size:
            self.has_more = False
        added = [v for v in page if not self._known(v.post.id)]
        self.displayed.extend(added)
        return added

    async def merge_pending(self) -> list[FeedPostView]:
        """Move staged posts to the front of the displayed list, newest first.

        Returns:
            The merged posts
        """
        merged = sorted(self.staged, key=lambda v: v.post.created_at, reverse=True)
        self.staged = []
        self.displayed = merged + self.displayed
        if merged and self.on_change is not None:
            await self.on_change()
        return merged

    def prepend_own(self, view: FeedPostView) -> None:
        """Show a post the viewer just published."""
        if not self._known(view.post.id):
            self.displayed.insert(0, view)

    async def set_viewer(self, viewer_id: UserId) -> list[FeedPostView]:
        """Switch viewer, resubscribing and reloading the first page.

        Staged posts are dropped and the displayed list is fetched again, so
        per-viewer fields such as liked_by_me belong to the new viewer.

        Returns:
            The reloaded first page; empty if the viewer is unchanged
        """
        if viewer_id == self.viewer_id:
            return []
        self.viewer_id = viewer_id
        self.staged = []
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
        self.start()
        return await self.load_initial()

    def close(self) -> None:
        """Stop listening. Idempotent."""
        self._closed = True
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
            logfire.info("Feed buffer closed", viewer_id=str(self.viewer_id))
