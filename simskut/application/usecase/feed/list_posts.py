"""List posts use case."""

from pydantic import BaseModel, Field

from simskut.domain.error import NotFoundError
from simskut.domain.service import FeedService
from simskut.domain.value import PostId, UserId

from .post_response import PostResponse


class ListPostsRequest(BaseModel):
    """List posts request."""

    viewer_id: UserId
    limit: int | None = Field(default=None, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListPostsResponse(BaseModel):
    """A page of the feed."""

    posts: list[PostResponse]
    has_more: bool


class ListPostsUseCase:
    """Use case for paging through the feed."""

    def __init__(self, feed_service: FeedService) -> None:
        """Initialize list posts use case.

        Args:
            feed_service: Feed domain service
        """
        self.feed_service = feed_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Return a page newest first; a short page means there is no more."""
        limit = request.limit or self.feed_service.feed_settings.page_size
        views = await self.feed_service.list_posts(
            request.viewer_id, limit, request.offset
        )
        return ListPostsResponse(
            posts=[PostResponse.from_view(v) for v in views],
            has_more=len(views) == limit,
        )


class GetPostUseCase:
    """Use case for a single post."""

    def __init__(self, feed_service: FeedService) -> None:
        """Initialize get post use case.

        Args:
            feed_service: Feed domain service
        """
        self.feed_service = feed_service

    async def execute(self, post_id: PostId, viewer_id: UserId) -> PostResponse:
        """Return the joined post.

        Raises:
            NotFoundError: If the post does not exist
        """
        view = await self.feed_service.get_post_view(post_id, viewer_id)
        if view is None:
            raise NotFoundError("Post", str(post_id))
        return PostResponse.from_view(view)
