"""Unit tests for post, like and comment use cases."""

from uuid import UUID, uuid4

import pytest

from simskut.application.usecase.comment import AddCommentRequest, AddCommentUseCase
from simskut.application.usecase.feed import (
    CreatePostRequest,
    CreatePostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    ToggleLikeUseCase,
)
from simskut.domain.error import ValidationError
from simskut.domain.repository import NotificationRepository, ProfileRepository
from simskut.domain.service import FeedService
from simskut.domain.value import NotificationType, PostId, UserId
from simskut.util.tasks import BackgroundDispatcher, JobOutbox
from tests.conftest import make_profile
from tests.harness import create_app_container_fixture, create_env_fixture

unit_env = create_env_fixture()
app_container = create_app_container_fixture()


class TestCreatePost:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_mentions_notified_after_commit(self, app_container):
        """Mention notifications run once the request scope has committed."""
        # Arrange
        dispatcher = await app_container.get(BackgroundDispatcher)
        async with app_container() as scoped:
            profile_repo = await scoped.get(ProfileRepository)
            author = await profile_repo.create(make_profile("autora"))
            bob = await profile_repo.create(make_profile("bob"))

        # Act
        async with app_container() as scoped:
            use_case = await scoped.get(CreatePostUseCase)
            outbox = await scoped.get(JobOutbox)
            response = await use_case.execute(
                CreatePostRequest(author_id=author.id, content="Oi @bob, olha a casa!")
            )
            queued = outbox.pending
            running = dispatcher.pending
        await dispatcher.drain()

        # Assert
        assert (queued, running) == (1, 0)
        assert response.author.username == "autora"
        assert response.like_count == 0
        async with app_container() as scoped:
            notification_repo = await scoped.get(NotificationRepository)
            [view] = await notification_repo.list_for_user(bob.id, 10)
        assert view.notification.type == NotificationType.MENTION_POST
        assert view.notification.reference_id == response.id

    @pytest.mark.asyncio
    async def test_failed_request_sends_no_mentions(self, app_container, monkeypatch):
        """A request failing after the insert drops the queued fan-out."""
        # Arrange
        dispatcher = await app_container.get(BackgroundDispatcher)
        async with app_container() as scoped:
            profile_repo = await scoped.get(ProfileRepository)
            author = await profile_repo.create(make_profile("autora"))
            bob = await profile_repo.create(make_profile("bob"))

        async def broken_view(self, post_id, viewer_id):
            raise RuntimeError("read replica unavailable")

        monkeypatch.setattr(FeedService, "get_post_view", broken_view)

        # Act
        with pytest.raises(RuntimeError):
            async with app_container() as scoped:
                use_case = await scoped.get(CreatePostUseCase)
                await use_case.execute(
                    CreatePostRequest(author_id=author.id, content="Oi @bob!")
                )
        await dispatcher.drain()

        # Assert
        async with app_container() as scoped:
            notification_repo = await scoped.get(NotificationRepository)
            assert await notification_repo.list_for_user(bob.id, 10) == []

    @pytest.mark.asyncio
    async def test_invalid_post_schedules_nothing(self, unit_env):
        """A rejected post leaves no background work."""
        use_case = await unit_env.get(CreatePostUseCase)
        outbox = await unit_env.get(JobOutbox)

        with pytest.raises(ValidationError):
            await use_case.execute(CreatePostRequest(author_id=UserId(uuid4())))

        assert outbox.pending == 0


class TestListPosts:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_short_page_has_no_more(self, unit_env):
        """has_more is false once a page comes back short."""
        # Arrange
        create = await unit_env.get(CreatePostUseCase)
        list_posts = await unit_env.get(ListPostsUseCase)
        author_id = UserId(uuid4())
        for i in range(3):
            await create.execute(CreatePostRequest(author_id=author_id, content=f"post {i}"))

        # Act
        first = await list_posts.execute(
            ListPostsRequest(viewer_id=author_id, limit=2, offset=0)
        )
        second = await list_posts.execute(
            ListPostsRequest(viewer_id=author_id, limit=2, offset=2)
        )

        # Assert
        assert [p.content for p in first.posts] == ["post 2", "post 1"]
        assert first.has_more is True
        assert [p.content for p in second.posts] == ["post 0"]
        assert second.has_more is False


class TestInteractions:
    """Tests for likes and comments notifying the post author."""

    @pytest.mark.asyncio
    async def test_like_notifies_author_once(self, unit_env):
        """Liking notifies the author; unliking does not."""
        # Arrange
        create = await unit_env.get(CreatePostUseCase)
        toggle = await unit_env.get(ToggleLikeUseCase)
        notification_repo = await unit_env.get(NotificationRepository)
        author_id, fan_id = UserId(uuid4()), UserId(uuid4())
        post = await create.execute(CreatePostRequest(author_id=author_id, content="oi"))
        post_id = PostId(UUID(post.id))

        # Act
        liked = await toggle.execute(post_id, fan_id)
        unliked = await toggle.execute(post_id, fan_id)

        # Assert
        assert (liked.liked, unliked.liked) == (True, False)
        [view] = await notification_repo.list_for_user(author_id, 10)
        assert view.notification.type == NotificationType.LIKE_POST

    @pytest.mark.asyncio
    async def test_own_like_is_silent(self, unit_env):
        """Authors liking their own posts are not notified."""
        create = await unit_env.get(CreatePostUseCase)
        toggle = await unit_env.get(ToggleLikeUseCase)
        notification_repo = await unit_env.get(NotificationRepository)
        author_id = UserId(uuid4())
        post = await create.execute(CreatePostRequest(author_id=author_id, content="oi"))

        await toggle.execute(PostId(UUID(post.id)), author_id)

        assert await notification_repo.count_unread(author_id) == 0

    @pytest.mark.asyncio
    async def test_comment_notifies_author_and_mentions(self, app_container):
        """A comment notifies the author now and mentioned users after commit."""
        # Arrange
        dispatcher = await app_container.get(BackgroundDispatcher)
        async with app_container() as scoped:
            profile_repo = await scoped.get(ProfileRepository)
            author = await profile_repo.create(make_profile("autora"))
            commenter = await profile_repo.create(make_profile("fan"))
            friend = await profile_repo.create(make_profile("amiga"))
            create = await scoped.get(CreatePostUseCase)
            post = await create.execute(CreatePostRequest(author_id=author.id, content="oi"))

        # Act
        async with app_container() as scoped:
            add_comment = await scoped.get(AddCommentUseCase)
            notification_repo = await scoped.get(NotificationRepository)
            comment = await add_comment.execute(
                AddCommentRequest(
                    post_id=PostId(UUID(post.id)),
                    author_id=commenter.id,
                    content="@amiga vem ver",
                )
            )
            [to_author] = await notification_repo.list_for_user(author.id, 10)
            before_commit = await notification_repo.list_for_user(friend.id, 10)
        await dispatcher.drain()

        # Assert
        assert comment.author.username == "fan"
        assert to_author.notification.type == NotificationType.COMMENT_POST
        assert to_author.notification.content == "@amiga vem ver"
        assert before_commit == []
        async with app_container() as scoped:
            notification_repo = await scoped.get(NotificationRepository)
            [to_friend] = await notification_repo.list_for_user(friend.id, 10)
        assert to_friend.notification.type == NotificationType.MENTION_COMMENT
        assert to_friend.notification.reference_id == comment.id
