"""Create post use case."""

import logfire
from dishka import AsyncContainer
from pydantic import BaseModel, Field

from simskut.domain.error import NotFoundError
from simskut.domain.service import FeedService, NotificationService
from simskut.domain.value import NotificationType, UserId
from simskut.util.tasks import JobOutbox

from .post_response import PostResponse


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: UserId
    content: str | None = None
    image_urls: list[str] = Field(default_factory=list)


class CreatePostUseCase:
    """Use case for publishing a feed post."""

    def __init__(
        self, feed_service: FeedService, outbox: JobOutbox
    ) -> None:
        """Initialize create post use case.

        Args:
            feed_service: Feed domain service
            outbox: Post-commit job outbox for mention fan-out
        """
        self.feed_service = feed_service
        self.outbox = outbox

    async def execute(self, request: CreatePostRequest) -> PostResponse:
        """Execute create post flow.

        Steps:
        1. Validate and save the post
        2. Queue mention notifications to run once the post is committed
        3. Return the joined post

        Raises:
            ValidationError: If the post is empty or exceeds the limits
        """
        post = await self.feed_service.create_post(
            request.author_id, request.content, request.image_urls
        )

        if post.content:
            text, actor_id, reference_id = post.content, post.author_id, str(post.id)

            async def notify_mentions(container: AsyncContainer) -> None:
                notification_service = await container.get(NotificationService)
                await notification_service.process_mentions(
                    text, actor_id, NotificationType.MENTION_POST, reference_id
                )

            self.outbox.add("mention_post", notify_mentions)

        view = await self.feed_service.get_post_view(post.id, request.author_id)
        if view is None:
            raise NotFoundError("Post", str(post.id))
        logfire.info("Post published", post_id=str(post.id))
        return PostResponse.from_view(view)
