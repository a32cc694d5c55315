"""Add comment use case."""

from datetime import datetime

import logfire
from dishka import AsyncContainer
from pydantic import BaseModel

from simskut.domain.model import PostCommentView
from simskut.domain.service import FeedService, NotificationService, ProfileService
from simskut.domain.value import NotificationType, PostId, PublicProfile, UserId
from simskut.util.tasks import JobOutbox


class AddCommentRequest(BaseModel):
    """Add comment request."""

    post_id: PostId
    author_id: UserId
    content: str


class CommentResponse(BaseModel):
    """Comment with its author."""

    id: str
    post_id: str
    author_id: str
    author: PublicProfile | None
    content: str
    created_at: datetime

    @classmethod
    def from_view(cls, view: PostCommentView) -> "CommentResponse":
        """Build from the joined read model."""
        return cls(
            id=str(view.comment.id),
            post_id=str(view.comment.post_id),
            author_id=str(view.comment.author_id),
            author=view.author,
            content=view.comment.content,
            created_at=view.comment.created_at,
        )


class AddCommentUseCase:
    """Use case for commenting on a post."""

    def __init__(
        self,
        feed_service: FeedService,
        notification_service: NotificationService,
        profile_service: ProfileService,
        outbox: JobOutbox,
    ) -> None:
        """Initialize add comment use case.

        Args:
            feed_service: Feed domain service
            notification_service: Notification domain service
            profile_service: Profile domain service
            outbox: Post-commit job outbox for mention fan-out
        """
        self.feed_service = feed_service
        self.notification_service = notification_service
        self.profile_service = profile_service
        self.outbox = outbox

    async def execute(self, request: AddCommentRequest) -> CommentResponse:
        """Execute add comment flow.

        Steps:
        1. Save the comment
        2. Notify the post author (skipped for their own comments)
        3. Queue mention notifications to run once the comment is committed

        Raises:
            ValidationError: If the comment is empty or too long
            NotFoundError: If the post does not exist
        """
        comment = await self.feed_service.add_comment(
            request.post_id, request.author_id, request.content
        )
        post = await self.feed_service.get_post(request.post_id)
        await self.notification_service.create_interaction_notification(
            recipient_id=post.author_id,
            actor_id=request.author_id,
            notification_type=NotificationType.COMMENT_POST,
            reference_id=str(post.id),
            content=comment.content,
        )

        text, actor_id, reference_id = comment.content, comment.author_id, str(comment.id)

        async def notify_mentions(container: AsyncContainer) -> None:
            notification_service = await container.get(NotificationService)
            await notification_service.process_mentions(
                text, actor_id, NotificationType.MENTION_COMMENT, reference_id
            )

        self.outbox.add("mention_comment", notify_mentions)

        author = await self.profile_service.fetch_profile(request.author_id)
        logfire.info("Comment published", comment_id=str(comment.id))
        return CommentResponse.from_view(
            PostCommentView(
                comment=comment, author=author.to_public() if author else None
            )
        )
