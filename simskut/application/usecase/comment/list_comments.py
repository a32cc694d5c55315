"""List comments use case."""

from pydantic import BaseModel

from simskut.domain.service import FeedService
from simskut.domain.value import PostId

from .add_comment import CommentResponse


class ListCommentsResponse(BaseModel):
    """A post's comments, oldest first."""

    comments: list[CommentResponse]


class ListCommentsUseCase:
    """Use case for reading a post's comments."""

    def __init__(self, feed_service: FeedService) -> None:
        """Initialize list comments use case.

        Args:
            feed_service: Feed domain service
        """
        self.feed_service = feed_service

    async def execute(self, post_id: PostId) -> ListCommentsResponse:
        """List comments.

        Raises:
            NotFoundError: If the post does not exist
        """
        await self.feed_service.get_post(post_id)
        views = await self.feed_service.list_comments(post_id)
        return ListCommentsResponse(
            comments=[CommentResponse.from_view(v) for v in views]
        )
