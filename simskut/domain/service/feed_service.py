"""Feed domain service."""

import logfire
from uuid import uuid4

from simskut.config import FeedSettings
from simskut.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from simskut.domain.model import FeedPost, FeedPostView, PostComment, PostCommentView
from simskut.domain.model.common import utcnow
from simskut.domain.repository import CommentRepository, PostRepository
from simskut.domain.value import CommentId, PostId, UserId

from .base import Service


class FeedService(Service):
    """Domain service for posts, likes and comments."""

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        feed_settings: FeedSettings,
    ) -> None:
        """Initialize feed service.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository
            feed_settings: Feed limits
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.feed_settings = feed_settings

    async def create_post(
        self, author_id: UserId, content: str | None, image_urls: list[str]
    ) -> FeedPost:
        """Create a post.

        Args:
            author_id: Post author
            content: Optional text, at most post_max_length characters
            image_urls: Up to max_images image URLs

        Returns:
            Created post

        Raises:
            ValidationError: If the post is empty or exceeds the limits
        """
        text = (content or "").strip() or None
        if text is None and not image_urls:
            raise ValidationError("Post must have text or at least one image")
        if text is not None and len(text) > self.feed_settings.post_max_length:
            raise ValidationError(
                f"Post must be at most {self.feed_settings.post_max_length} characters"
            )
        if len(image_urls) > self.feed_settings.max_images:
            raise ValidationError(
                f"Post can have at most {self.feed_settings.max_images} images"
            )

        with logfire.span("feed_service.create_post", author_id=str(author_id)):
            post = FeedPost(
                id=PostId(uuid4()),
                author_id=author_id,
                content=text,
                image_urls=list(image_urls),
                created_at=utcnow(),
            )
            saved = await self.post_repository.create(post)
            logfire.info(
                "Post created",
                post_id=str(saved.id),
                author_id=str(author_id),
                images=len(image_urls),
            )
            return saved

    async def get_post(self, post_id: PostId) -> FeedPost:
        """Get a post that must exist.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_repository.find_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))
        return post

    async def get_post_view(self, post_id: PostId, viewer_id: UserId) -> FeedPostView | None:
        """Fully joined post for one viewer, or None if it is gone."""
        with logfire.span("feed_service.get_post_view", post_id=str(post_id)):
            return await self.post_repository.find_view(post_id, viewer_id)

    async def list_posts(
        self, viewer_id: UserId, limit: int | None = None, offset: int = 0
    ) -> list[FeedPostView]:
        """A page of the feed, newest first."""
        limit = limit or self.feed_settings.page_size
        with logfire.span("feed_service.list_posts", limit=limit, offset=offset):
            return await self.post_repository.list_views(viewer_id, limit, offset)

    async def delete_post(
        self, post_id: PostId, user_id: UserId, is_admin: bool = False
    ) -> None:
        """Delete a post. Only the author or an admin may do this.

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the caller is neither author nor admin
        """
        with logfire.span("feed_service.delete_post", post_id=str(post_id)):
            post = await self.get_post(post_id)
            if post.author_id != user_id and not is_admin:
                raise NotAuthorizedError(f"delete post {post_id}", str(user_id))
            await self.post_repository.delete(post_id)
            logfire.info("Post deleted", post_id=str(post_id), by=str(user_id))

    async def toggle_like(self, post_id: PostId, user_id: UserId) -> bool:
        """Like the post, or remove the like if already present.

        Returns:
            True if the post is liked after the call
        """
        with logfire.span(
            "feed_service.toggle_like", post_id=str(post_id), user_id=str(user_id)
        ):
            await self.get_post(post_id)
            if await self.post_repository.has_like(post_id, user_id):
                await self.post_repository.remove_like(post_id, user_id)
                return False
            await self.post_repository.add_like(post_id, user_id)
            return True

    async def add_comment(
        self, post_id: PostId, author_id: UserId, content: str
    ) -> PostComment:
        """Comment on a post.

        Raises:
            ValidationError: If the comment is empty or too long
            NotFoundError: If the post does not exist
        """
        text = content.strip()
        if not text:
            raise ValidationError("Comment cannot be empty")
        if len(text) > self.feed_settings.comment_max_length:
            raise ValidationError(
                f"Comment must be at most {self.feed_settings.comment_max_length} characters"
            )

        with logfire.span("feed_service.add_comment", post_id=str(post_id)):
            await self.get_post(post_id)
            comment = PostComment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                content=text,
                created_at=utcnow(),
            )
            saved = await self.comment_repository.create(comment)
            logfire.info(
                "Comment added", comment_id=str(saved.id), post_id=str(post_id)
            )
            return saved

    async def list_comments(self, post_id: PostId) -> list[PostCommentView]:
        """A post's comments, oldest first."""
        with logfire.span("feed_service.list_comments", post_id=str(post_id)):
            return await self.comment_repository.list_views_for_post(post_id)

    async def delete_comment(
        self, comment_id: CommentId, user_id: UserId, is_admin: bool = False
    ) -> None:
        """Delete a comment. Only the author or an admin may do this.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the caller is neither author nor admin
        """
        with logfire.span("feed_service.delete_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))
            if comment.author_id != user_id and not is_admin:
                raise NotAuthorizedError(f"delete comment {comment_id}", str(user_id))
            await self.comment_repository.delete(comment_id)
            logfire.info("Comment deleted", comment_id=str(comment_id))

    async def count_posts(self) -> int:
        """Total number of posts."""
        return await self.post_repository.count()
