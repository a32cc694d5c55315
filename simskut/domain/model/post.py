"""Feed post, comment and like entities."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from simskut.domain.model.common import DomainModel, utcnow
from simskut.domain.value import CommentId, PostId, PublicProfile, UserId


class FeedPost(DomainModel):
    """Feed post.

    Business rules:
    - content is at most 280 characters
    - at most 4 images
    - a post needs content or at least one image
    """

    id: PostId
    author_id: UserId
    content: Optional[str] = None
    image_urls: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)


class FeedPostView(DomainModel):
    """Post joined with author and aggregated counts for one viewer."""

    post: FeedPost
    author: Optional[PublicProfile] = None
    like_count: int = 0
    comment_count: int = 0
    liked_by_me: bool = False

    @property
    def id(self) -> PostId:
        """Id of the underlying post."""
        return self.post.id


class PostComment(DomainModel):
    """Comment on a feed post."""

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str
    created_at: datetime = Field(default_factory=utcnow)


class PostCommentView(DomainModel):
    """Comment joined with its author."""

    comment: PostComment
    author: Optional[PublicProfile] = None
