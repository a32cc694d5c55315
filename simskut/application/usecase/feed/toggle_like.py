"""Toggle like use case."""

from pydantic import BaseModel

from simskut.domain.service import FeedService, NotificationService
from simskut.domain.value import NotificationType, PostId, UserId


class ToggleLikeResponse(BaseModel):
    """Like state after the toggle."""

    liked: bool


class ToggleLikeUseCase:
    """Use case for liking and unliking a post."""

    def __init__(
        self, feed_service: FeedService, notification_service: NotificationService
    ) -> None:
        """Initialize toggle like use case.

        Args:
            feed_service: Feed domain service
            notification_service: Notification domain service
        """
        self.feed_service = feed_service
        self.notification_service = notification_service

    async def execute(self, post_id: PostId, user_id: UserId) -> ToggleLikeResponse:
        """Flip the like; a new like notifies the post author.

        Raises:
            NotFoundError: If the post does not exist
        """
        liked = await self.feed_service.toggle_like(post_id, user_id)
        if liked:
            post = await self.feed_service.get_post(post_id)
            await self.notification_service.create_interaction_notification(
                recipient_id=post.author_id,
                actor_id=user_id,
                notification_type=NotificationType.LIKE_POST,
                reference_id=str(post_id),
                content=post.content,
            )
        return ToggleLikeResponse(liked=liked)
