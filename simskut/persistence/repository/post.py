"""PostgreSQL implementations of feed post and comment repositories."""

from typing import Any, Optional

from sqlalchemy import and_, delete, exists, func, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from simskut.domain.model import FeedPost, FeedPostView, PostComment, PostCommentView
from simskut.domain.repository import CommentRepository, PostRepository
from simskut.domain.value import CommentId, PostId, UserId
from simskut.persistence.mappers import (
    comment_to_dict,
    post_to_dict,
    row_to_comment,
    row_to_post,
    row_to_public_profile,
)
from simskut.persistence.tables import (
    feed_posts_table,
    post_comments_table,
    post_likes_table,
    profiles_table,
)


def _post_view_query(viewer_id: UserId) -> Any:
    """Posts joined with author, counts and the viewer's like."""
    like_count = (
        select(func.count())
        .select_from(post_likes_table)
        .where(post_likes_table.c.post_id == feed_posts_table.c.id)
        .scalar_subquery()
    )
    comment_count = (
        select(func.count())
        .select_from(post_comments_table)
        .where(post_comments_table.c.post_id == feed_posts_table.c.id)
        .scalar_subquery()
    )
    liked_by_me = exists().where(
        and_(
            post_likes_table.c.post_id == feed_posts_table.c.id,
            post_likes_table.c.user_id == viewer_id,
        )
    )
    return select(
        feed_posts_table,
        profiles_table.c.username.label("author_username"),
        profiles_table.c.display_name.label("author_display_name"),
        profiles_table.c.avatar_url.label("author_avatar_url"),
        like_count.label("like_count"),
        comment_count.label("comment_count"),
        liked_by_me.label("liked_by_me"),
    ).select_from(
        feed_posts_table.outerjoin(
            profiles_table, profiles_table.c.id == feed_posts_table.c.author_id
        )
    )


def _row_to_post_view(row: dict[str, Any]) -> FeedPostView:
    return FeedPostView(
        post=row_to_post(row),
        author=row_to_public_profile(row, prefix="author_"),
        like_count=row["like_count"] or 0,
        comment_count=row["comment_count"] or 0,
        liked_by_me=bool(row["liked_by_me"]),
    )


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, post: FeedPost) -> FeedPost:
        """Insert a new post.

        Args:
            post: Post to insert

        Returns:
            Created post
        """
        stmt = insert(feed_posts_table).values(**post_to_dict(post))
        await self.session.execute(stmt)
        await self.session.flush()
        return post

    async def find_by_id(self, post_id: PostId) -> Optional[FeedPost]:
        """Find a post by ID."""
        stmt = select(feed_posts_table).where(feed_posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_post(dict(row)) if row else None

    async def find_view(self, post_id: PostId, viewer_id: UserId) -> Optional[FeedPostView]:
        """Load one fully joined post."""
        stmt = _post_view_query(viewer_id).where(feed_posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_post_view(dict(row)) if row else None

    async def list_views(
        self, viewer_id: UserId, limit: int, offset: int
    ) -> list[FeedPostView]:
        """A page of posts, newest first."""
        stmt = (
            _post_view_query(viewer_id)
            .order_by(feed_posts_table.c.created_at.desc(), feed_posts_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [_row_to_post_view(dict(row)) for row in result.mappings().all()]

    async def delete(self, post_id: PostId) -> None:
        """Delete a post; likes and comments cascade."""
        stmt = delete(feed_posts_table).where(feed_posts_table.c.id == post_id)
        await self.session.execute(stmt)

    async def has_like(self, post_id: PostId, user_id: UserId) -> bool:
        """Whether the user likes the post."""
        stmt = select(post_likes_table.c.id).where(
            and_(
                post_likes_table.c.post_id == post_id,
                post_likes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def add_like(self, post_id: PostId, user_id: UserId) -> None:
        """Record a like; a duplicate is ignored."""
        stmt = (
            pg_insert(post_likes_table)
            .values(post_id=post_id, user_id=user_id)
            .on_conflict_do_nothing(constraint="uq_post_likes_post_user")
        )
        await self.session.execute(stmt)

    async def remove_like(self, post_id: PostId, user_id: UserId) -> None:
        """Remove a like if present."""
        stmt = delete(post_likes_table).where(
            and_(
                post_likes_table.c.post_id == post_id,
                post_likes_table.c.user_id == user_id,
            )
        )
        await self.session.execute(stmt)

    async def count(self) -> int:
        """Count all posts."""
        stmt = select(func.count()).select_from(feed_posts_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, comment: PostComment) -> PostComment:
        """Insert a new comment."""
        stmt = insert(post_comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def find_by_id(self, comment_id: CommentId) -> Optional[PostComment]:
        """Find a comment by ID."""
        stmt = select(post_comments_table).where(post_comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_comment(dict(row)) if row else None

    async def list_views_for_post(self, post_id: PostId) -> list[PostCommentView]:
        """A post's comments oldest first, with authors."""
        stmt = (
            select(
                post_comments_table,
                profiles_table.c.username.label("author_username"),
                profiles_table.c.display_name.label("author_display_name"),
                profiles_table.c.avatar_url.label("author_avatar_url"),
            )
            .select_from(
                post_comments_table.outerjoin(
                    profiles_table,
                    profiles_table.c.id == post_comments_table.c.author_id,
                )
            )
            .where(post_comments_table.c.post_id == post_id)
            .order_by(post_comments_table.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        views = []
        for row in result.mappings().all():
            data = dict(row)
            views.append(
                PostCommentView(
                    comment=row_to_comment(data),
                    author=row_to_public_profile(data, prefix="author_"),
                )
            )
        return views

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        stmt = delete(post_comments_table).where(post_comments_table.c.id == comment_id)
        await self.session.execute(stmt)
