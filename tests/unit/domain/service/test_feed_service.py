"""Unit tests for FeedService."""

from uuid import uuid4

import pytest

from simskut.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from simskut.domain.repository import ProfileRepository
from simskut.domain.service import ChangeFeed, FeedService
from simskut.domain.value import PostId, UserId
from tests.conftest import make_profile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreatePost:
    """Tests for create_post."""

    @pytest.mark.asyncio
    async def test_create_post_publishes_insert(self, unit_env):
        """A saved post is announced on the change feed."""
        # Arrange
        feed_service = await unit_env.get(FeedService)
        change_feed = await unit_env.get(ChangeFeed)
        author_id = UserId(uuid4())

        # Act
        post = await feed_service.create_post(author_id, "  Sul sul!  ", [])

        # Assert
        assert post.content == "Sul sul!"
        [change] = change_feed.published
        assert change.table == "feed_posts"
        assert change.event == "INSERT"
        assert change.record["id"] == str(post.id)
        assert change.record["author_id"] == str(author_id)

    @pytest.mark.asyncio
    async def test_image_only_post_allowed(self, unit_env):
        """A post may be images without text."""
        feed_service = await unit_env.get(FeedService)

        post = await feed_service.create_post(UserId(uuid4()), None, ["https://img/1.jpg"])

        assert post.content is None
        assert post.image_urls == ["https://img/1.jpg"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content,images",
        [
            (None, []),
            ("   ", []),
            ("x" * 281, []),
            ("ok", [f"https://img/{i}.jpg" for i in range(5)]),
        ],
    )
    async def test_invalid_posts_rejected(self, unit_env, content, images):
        """Empty, too long or too many images fail validation."""
        feed_service = await unit_env.get(FeedService)

        with pytest.raises(ValidationError):
            await feed_service.create_post(UserId(uuid4()), content, images)


class TestFeedReads:
    """Tests for listing, likes and deletes."""

    @pytest.mark.asyncio
    async def test_list_newest_first_with_counts(self, unit_env):
        """Pages are newest first and carry like state for the viewer."""
        # Arrange
        feed_service = await unit_env.get(FeedService)
        profile_repo = await unit_env.get(ProfileRepository)
        author = await profile_repo.create(make_profile("autora"))
        viewer_id = UserId(uuid4())
        first = await feed_service.create_post(author.id, "primeiro", [])
        second = await feed_service.create_post(author.id, "segundo", [])
        await feed_service.toggle_like(first.id, viewer_id)
        await feed_service.add_comment(first.id, viewer_id, "amei")

        # Act
        page = await feed_service.list_posts(viewer_id, limit=10, offset=0)

        # Assert
        assert [v.post.id for v in page] == [second.id, first.id]
        assert page[1].like_count == 1
        assert page[1].liked_by_me is True
        assert page[1].comment_count == 1
        assert page[1].author.username == "autora"
        assert page[0].liked_by_me is False

    @pytest.mark.asyncio
    async def test_toggle_like_twice_unlikes(self, unit_env):
        """The second toggle removes the like."""
        feed_service = await unit_env.get(FeedService)
        post = await feed_service.create_post(UserId(uuid4()), "oi", [])
        user_id = UserId(uuid4())

        assert await feed_service.toggle_like(post.id, user_id) is True
        assert await feed_service.toggle_like(post.id, user_id) is False

    @pytest.mark.asyncio
    async def test_like_missing_post(self, unit_env):
        """Liking a missing post raises NotFoundError."""
        feed_service = await unit_env.get(FeedService)

        with pytest.raises(NotFoundError):
            await feed_service.toggle_like(PostId(uuid4()), UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_only_author_deletes(self, unit_env):
        """Other users cannot delete a post; the author can."""
        # Arrange
        feed_service = await unit_env.get(FeedService)
        author_id = UserId(uuid4())
        post = await feed_service.create_post(author_id, "meu post", [])

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await feed_service.delete_post(post.id, UserId(uuid4()))
        await feed_service.delete_post(post.id, author_id)
        assert await feed_service.get_post_view(post.id, author_id) is None

    @pytest.mark.asyncio
    async def test_comments_oldest_first_and_author_only_delete(self, unit_env):
        """Comments list oldest first; only their author deletes them."""
        # Arrange
        feed_service = await unit_env.get(FeedService)
        post = await feed_service.create_post(UserId(uuid4()), "post", [])
        commenter = UserId(uuid4())
        first = await feed_service.add_comment(post.id, commenter, "um")
        await feed_service.add_comment(post.id, UserId(uuid4()), "dois")

        # Act
        comments = await feed_service.list_comments(post.id)

        # Assert
        assert [c.comment.content for c in comments] == ["um", "dois"]
        with pytest.raises(NotAuthorizedError):
            await feed_service.delete_comment(first.id, UserId(uuid4()))
        await feed_service.delete_comment(first.id, commenter)
        assert len(await feed_service.list_comments(post.id)) == 1

    @pytest.mark.asyncio
    async def test_empty_comment_rejected(self, unit_env):
        """Whitespace-only comments fail validation."""
        feed_service = await unit_env.get(FeedService)
        post = await feed_service.create_post(UserId(uuid4()), "post", [])

        with pytest.raises(ValidationError):
            await feed_service.add_comment(post.id, UserId(uuid4()), "   ")
