"""Feed post repository interfaces."""

from abc import ABC, abstractmethod

from simskut.domain.model import FeedPost, FeedPostView, PostComment, PostCommentView
from simskut.domain.value import CommentId, PostId, UserId


class PostRepository(ABC):
    """Repository for FeedPost entity and its likes."""

    @abstractmethod
    async def create(self, post: FeedPost) -> FeedPost:
        """Insert a new post.

        Args:
            post: Post to insert

        Returns:
            The created post
        """
        pass

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> FeedPost | None:
        """Find a post by ID."""
        pass

    @abstractmethod
    async def find_view(self, post_id: PostId, viewer_id: UserId) -> FeedPostView | None:
        """Load the fully joined representation of one post.

        Args:
            post_id: Post ID
            viewer_id: Viewer used for liked_by_me

        Returns:
            The post view if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_views(
        self, viewer_id: UserId, limit: int, offset: int
    ) -> list[FeedPostView]:
        """List posts newest first with author, counts and liked_by_me.

        Args:
            viewer_id: Viewer used for liked_by_me
            limit: Page size
            offset: Number of posts to skip

        Returns:
            A page of post views
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Delete a post and its likes and comments."""
        pass

    @abstractmethod
    async def has_like(self, post_id: PostId, user_id: UserId) -> bool:
        """Whether the user likes the post."""
        pass

    @abstractmethod
    async def add_like(self, post_id: PostId, user_id: UserId) -> None:
        """Record a like; liking twice is a no-op."""
        pass

    @abstractmethod
    async def remove_like(self, post_id: PostId, user_id: UserId) -> None:
        """Remove a like if present."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all posts."""
        pass


class CommentRepository(ABC):
    """Repository for PostComment entity."""

    @abstractmethod
    async def create(self, comment: PostComment) -> PostComment:
        """Insert a new comment."""
        pass

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> PostComment | None:
        """Find a comment by ID."""
        pass

    @abstractmethod
    async def list_views_for_post(self, post_id: PostId) -> list[PostCommentView]:
        """List a post's comments oldest first, with authors."""
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        pass
