"""Feed post response model shared by feed use cases."""

from datetime import datetime

from pydantic import BaseModel

from simskut.domain.model import FeedPostView
from simskut.domain.value import PublicProfile


class PostResponse(BaseModel):
    """Post with author and counts, as seen by one viewer."""

    id: str
    author_id: str
    author: PublicProfile | None
    content: str | None
    image_urls: list[str]
    like_count: int
    comment_count: int
    liked_by_me: bool
    created_at: datetime

    @classmethod
    def from_view(cls, view: FeedPostView) -> "PostResponse":
        """Build from the joined read model."""
        return cls(
            id=str(view.post.id),
            author_id=str(view.post.author_id),
            author=view.author,
            content=view.post.content,
            image_urls=list(view.post.image_urls),
            like_count=view.like_count,
            comment_count=view.comment_count,
            liked_by_me=view.liked_by_me,
            created_at=view.post.created_at,
        )
