"""Unit tests for the realtime feed buffer."""

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest

from simskut.application.realtime import FeedBuffer, FeedSource
from simskut.domain.model import FeedPostView
from simskut.domain.model.common import utcnow
from simskut.domain.service import ChangeEvent
from simskut.domain.value import PostId, UserId
from simskut.persistence.realtime import InMemoryChangeFeed
from tests.conftest import make_post_view


class FakeFeedSource(FeedSource):
    """Feed source over a plain list, newest first."""

    def __init__(self, views: list[FeedPostView] | None = None) -> None:
        self.views = list(views or [])
        self.by_id: dict[PostId, FeedPostView] = {v.post.id: v for v in self.views}
        self.gate: asyncio.Event | None = None

    async def fetch_post(self, post_id: PostId, viewer_id: UserId) -> FeedPostView | None:
        if self.gate is not None:
            await self.gate.wait()
        return self.by_id.get(post_id)

    async def fetch_page(
        self, viewer_id: UserId, limit: int, offset: int
    ) -> list[FeedPostView]:
        if self.gate is not None:
            await self.gate.wait()
        return self.views[offset : offset + limit]


async def _insert(feed: InMemoryChangeFeed, source: FakeFeedSource, view: FeedPostView) -> None:
    source.by_id[view.post.id] = view
    await feed.publish(
        ChangeEvent(
            table="feed_posts", event="INSERT", record=view.post.model_dump(mode="json")
        )
    )


@pytest.fixture
def feed() -> InMemoryChangeFeed:
    return InMemoryChangeFeed()


@pytest.fixture
def viewer_id() -> UserId:
    return UserId(uuid4())


class TestStaging:
    """Tests for staging inserts from other users."""

    @pytest.mark.asyncio
    async def test_other_users_posts_are_staged(self, feed, viewer_id):
        """Inserts by others are staged, not displayed, and announced."""
        # Arrange
        source = FakeFeedSource()
        changes = []

        async def on_change():
            changes.append(True)

        buffer = FeedBuffer(feed, source, viewer_id, page_size=10, on_change=on_change)
        buffer.start()

        # Act
        await _insert(feed, source, make_post_view())

        # Assert
        assert buffer.pending_count == 1
        assert buffer.displayed == []
        assert len(changes) == 1

    @pytest.mark.asyncio
    async def test_own_posts_are_skipped(self, feed, viewer_id):
        """The viewer's own inserts never enter the staged list."""
        source = FakeFeedSource()
        buffer = FeedBuffer(feed, source, viewer_id, page_size=10)
        buffer.start()

        await _insert(feed, source, make_post_view(author_id=viewer_id))

        assert buffer.pending_count == 0

    @pytest.mark.asyncio
    async def test_known_posts_are_not_staged_twice(self, feed, viewer_id):
        """A post already displayed or staged is ignored."""
        # Arrange
        shown = make_post_view()
        source = FakeFeedSource([shown])
        buffer = FeedBuffer(feed, source, viewer_id, page_size=10)
        buffer.start()
        await buffer.load_initial()
        fresh = make_post_view()

        # Act
        await _insert(feed, source, shown)
        await _insert(feed, source, fresh)
        await _insert(feed, source, fresh)

        # Assert
        assert [v.post.id for v in buffer.staged] == [fresh.post.id]

    @pytest.mark.asyncio
    async def test_malformed_and_vanished_inserts_ignored(self, feed, viewer_id):
        """Records without an id or posts deleted before the fetch are dropped."""
        # Arrange
        source = FakeFeedSource()
        buffer = FeedBuffer(feed, source, viewer_id, page_size=10)
        buffer.start()

        # Act
        await feed.publish(ChangeEvent(table="feed_posts", event="INSERT", record={}))
        await feed.publish(
            ChangeEvent(
                table="feed_posts",
                event="INSERT",
                record={"id": str(uuid4()), "author_id": str(uuid4())},
            )
        )

        # Assert
        assert buffer.pending_count == 0


class TestMerge:
    """Tests for merging staged posts."""

    @pytest.mark.asyncio
    async def test_merge_puts_newest_first(self, feed, viewer_id):
        """Merged posts go before the displayed ones, newest first."""
        # Arrange
        now = utcnow()
        shown = make_post_view(created_at=now - timedelta(hours=1))
        source = FakeFeedSource([shown])
        buffer = FeedBuffer(feed, source, viewer_id, page_size=10)
        buffer.start()
        await buffer.load_initial()
        older = make_post_view(created_at=now - timedelta(minutes=5))
        newer = make_post_view(created_at=now)
        await _insert(feed, source, older)
        await _insert(feed, source, newer)

        # Act
        merged = await buffer.merge_pending()

        # Assert
        assert [v.post.id for v in merged] == [newer.post.id, older.post.id]
        assert [v.post.id for v in buffer.displayed] == [
            newer.post.id,
            older.post.id,
            shown.post.id,
        ]
        assert buffer.pending_count == 0

    @pytest.mark.asyncio
    async def test_merge_with_nothing_staged(self, feed, viewer_id):
        """Merging an empty stage changes nothing."""
        buffer = FeedBuffer(feed, FakeFeedSource(), viewer_id, page_size=10)

        assert await buffer.merge_pending() == []
        assert buffer.displayed == []


class TestPaging:
    """Tests for initial load and pagination."""

    @pytest.mark.asyncio
    async def test_short_page_ends_the_feed(self, feed, viewer_id):
        """A page shorter than page_size means there is nothing more."""
        # Arrange
        views = [make_post_view() for _ in range(3)]
        buffer = FeedBuffer(feed, FakeFeedSource(views), viewer_id, page_size=2)

        # Act
        first = await buffer.load_initial()
        second = await buffer.load_more()
        third = await buffer.load_more()

        # Assert
        assert len(first) == 2
        assert len(second) == 1
        assert third == []
        assert buffer.has_more is False
        assert len(buffer.displayed) == 3

    @pytest.mark.asyncio
    async def test_one_load_in_flight(self, feed, viewer_id):
        """A second load while one is running returns nothing."""
        # Arrange
        source = FakeFeedSource([make_post_view() for _ in range(2)])
        source.gate = asyncio.Event()
        buffer = FeedBuffer(feed, source, viewer_id, page_size=5)

        # Act
        running = asyncio.create_task(buffer.load_more())
        await asyncio.sleep(0)
        concurrent = await buffer.load_more()
        source.gate.set()
        loaded = await running

        # Assert
        assert concurrent == []
        assert len(loaded) == 2

    @pytest.mark.asyncio
    async def test_prepend_own(self, feed, viewer_id):
        """The viewer's new post goes on top once."""
        buffer = FeedBuffer(feed, FakeFeedSource(), viewer_id, page_size=5)
        own = make_post_view(author_id=viewer_id)

        buffer.prepend_own(own)
        buffer.prepend_own(own)

        assert buffer.displayed == [own]


class TestLifecycle:
    """Tests for viewer changes and closing."""

    @pytest.mark.asyncio
    async def test_close_unsubscribes(self, feed, viewer_id):
        """After close no event reaches the buffer."""
        # Arrange
        source = FakeFeedSource()
        buffer = FeedBuffer(feed, source, viewer_id, page_size=5)
        buffer.start()

        # Act
        buffer.close()
        buffer.close()
        await _insert(feed, source, make_post_view())

        # Assert
        assert feed.subscriber_count == 0
        assert buffer.subscribed is False
        assert buffer.pending_count == 0

    @pytest.mark.asyncio
    async def test_close_during_fetch_drops_result(self, feed, viewer_id):
        """A post fetched after close is not staged."""
        # Arrange
        source = FakeFeedSource()
        source.gate = asyncio.Event()
        buffer = FeedBuffer(feed, source, viewer_id, page_size=5)
        buffer.start()
        publishing = asyncio.create_task(_insert(feed, source, make_post_view()))
        await asyncio.sleep(0)

        # Act
        buffer.close()
        source.gate.set()
        await publishing

        # Assert
        assert buffer.pending_count == 0

    @pytest.mark.asyncio
    async def test_set_viewer_resubscribes(self, feed, viewer_id):
        """Switching viewer drops staged posts and keeps one subscription."""
        # Arrange
        source = FakeFeedSource()
        buffer = FeedBuffer(feed, source, viewer_id, page_size=5)
        buffer.start()
        await _insert(feed, source, make_post_view())
        new_viewer = UserId(uuid4())

        # Act
        await buffer.set_viewer(new_viewer)
        await _insert(feed, source, make_post_view(author_id=new_viewer))

        # Assert
        assert buffer.viewer_id == new_viewer
        assert buffer.pending_count == 0
        assert feed.subscriber_count == 1

    @pytest.mark.asyncio
    async def test_set_viewer_reloads_for_new_viewer(self, feed, viewer_id):
        """The displayed page is fetched again with the new viewer's likes."""
        # Arrange
        fan = UserId(uuid4())
        post = make_post_view()
        source = ViewerAwareFeedSource([post.post], liked_by={fan})
        buffer = FeedBuffer(feed, source, viewer_id, page_size=5)
        buffer.start()
        [before] = await buffer.load_initial()

        # Act
        reloaded = await buffer.set_viewer(fan)

        # Assert
        assert before.liked_by_me is False
        assert [v.liked_by_me for v in reloaded] == [True]
        assert [v.liked_by_me for v in buffer.displayed] == [True]

    @pytest.mark.asyncio
    async def test_page_for_previous_viewer_is_dropped(self, feed, viewer_id):
        """A page still loading when the viewer changes never lands."""
        # Arrange
        fan = UserId(uuid4())
        source = ViewerAwareFeedSource([make_post_view().post], liked_by={fan})
        buffer = FeedBuffer(feed, source, viewer_id, page_size=5)
        source.gate = asyncio.Event()
        stale = asyncio.create_task(buffer.load_initial())
        await asyncio.sleep(0)

        # Act
        switching = asyncio.create_task(buffer.set_viewer(fan))
        await asyncio.sleep(0)
        source.gate.set()
        stale_page = await stale
        fresh_page = await switching

        # Assert
        assert stale_page == []
        assert [v.liked_by_me for v in fresh_page] == [True]
        assert [v.liked_by_me for v in buffer.displayed] == [True]


class ViewerAwareFeedSource(FakeFeedSource):
    """Feed source computing liked_by_me for whoever is asking."""

    def __init__(self, posts, liked_by: set[UserId]) -> None:
        super().__init__()
        self.posts = list(posts)
        self.liked_by = liked_by

    def _view(self, post, viewer_id: UserId) -> FeedPostView:
        return FeedPostView(post=post, liked_by_me=viewer_id in self.liked_by)

    async def fetch_post(self, post_id: PostId, viewer_id: UserId) -> FeedPostView | None:
        if self.gate is not None:
            await self.gate.wait()
        return next(
            (self._view(p, viewer_id) for p in self.posts if p.id == post_id), None
        )

    async def fetch_page(
        self, viewer_id: UserId, limit: int, offset: int
    ) -> list[FeedPostView]:
        if self.gate is not None:
            await self.gate.wait()
        return [self._view(p, viewer_id) for p in self.posts[offset : offset + limit]]


class TestSubscriberIsolation:
    """Tests for one failing viewer not starving the others."""

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_block_other_buffers(self, feed):
        """A buffer whose socket is gone still lets later buffers stage posts."""
        # Arrange
        source = FakeFeedSource()

        async def dropped_socket():
            raise RuntimeError("websocket already closed")

        first = FeedBuffer(
            feed, source, UserId(uuid4()), page_size=5, on_change=dropped_socket
        )
        second = FeedBuffer(feed, source, UserId(uuid4()), page_size=5)
        first.start()
        second.start()

        # Act
        await _insert(feed, source, make_post_view())

        # Assert
        assert first.pending_count == 1
        assert second.pending_count == 1
