"""In-memory post and comment repositories for testing."""

from typing import Optional

from simskut.domain.model import FeedPost, FeedPostView, PostComment, PostCommentView
from simskut.domain.repository import CommentRepository, PostRepository
from simskut.domain.service.realtime import ChangeEvent, ChangeFeed
from simskut.domain.value import CommentId, PostId, UserId

from .store import InMemoryStore


def post_change_record(post: FeedPost) -> dict:
    """Row payload published for an inserted post, as the database trigger sends it."""
    return post.model_dump(mode="json")


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing.

    Inserts are published on the change feed, standing in for the
    database trigger.
    """

    def __init__(self, store: InMemoryStore, change_feed: ChangeFeed) -> None:
        self._store = store
        self._change_feed = change_feed

    def _view(self, post: FeedPost, viewer_id: UserId) -> FeedPostView:
        return FeedPostView(
            post=post,
            author=self._store.public_profile(post.author_id),
            like_count=sum(1 for pid, _ in self._store.likes if pid == post.id),
            comment_count=sum(
                1 for c in self._store.comments.values() if c.post_id == post.id
            ),
            liked_by_me=(post.id, viewer_id) in self._store.likes,
        )

    async def create(self, post: FeedPost) -> FeedPost:
        """Insert a new post and publish the insert."""
        self._store.posts[post.id] = post
        await self._change_feed.publish(
            ChangeEvent(table="feed_posts", event="INSERT", record=post_change_record(post))
        )
        return post

    async def find_by_id(self, post_id: PostId) -> Optional[FeedPost]:
        """Find a post by ID."""
        return self._store.posts.get(post_id)

    async def find_view(self, post_id: PostId, viewer_id: UserId) -> Optional[FeedPostView]:
        """Load one fully joined post."""
        post = self._store.posts.get(post_id)
        return self._view(post, viewer_id) if post else None

    async def list_views(
        self, viewer_id: UserId, limit: int, offset: int
    ) -> list[FeedPostView]:
        """A page of posts, newest first."""
        posts = list(self._store.posts.values())
        posts.reverse()
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return [self._view(p, viewer_id) for p in posts[offset : offset + limit]]

    async def delete(self, post_id: PostId) -> None:
        """Delete a post with its likes and comments."""
        self._store.posts.pop(post_id, None)
        self._store.likes = {like for like in self._store.likes if like[0] != post_id}
        for comment_id, comment in list(self._store.comments.items()):
            if comment.post_id == post_id:
                del self._store.comments[comment_id]

    async def has_like(self, post_id: PostId, user_id: UserId) -> bool:
        """Whether the user likes the post."""
        return (post_id, user_id) in self._store.likes

    async def add_like(self, post_id: PostId, user_id: UserId) -> None:
        """Record a like."""
        self._store.likes.add((post_id, user_id))

    async def remove_like(self, post_id: PostId, user_id: UserId) -> None:
        """Remove a like if present."""
        self._store.likes.discard((post_id, user_id))

    async def count(self) -> int:
        """Count all posts."""
        return len(self._store.posts)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def create(self, comment: PostComment) -> PostComment:
        """Insert a new comment."""
        self._store.comments[comment.id] = comment
        return comment

    async def find_by_id(self, comment_id: CommentId) -> Optional[PostComment]:
        """Find a comment by ID."""
        return self._store.comments.get(comment_id)

    async def list_views_for_post(self, post_id: PostId) -> list[PostCommentView]:
        """A post's comments oldest first, with authors."""
        comments = [c for c in self._store.comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: c.created_at)
        return [
            PostCommentView(comment=c, author=self._store.public_profile(c.author_id))
            for c in comments
        ]

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        self._store.comments.pop(comment_id, None)
