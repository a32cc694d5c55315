"""Notification domain service: mention fan-out and interaction feedback."""

import logfire
from uuid import uuid4

from simskut.config import NotificationSettings
from simskut.domain.model import Notification, NotificationView
from simskut.domain.model.common import utcnow
from simskut.domain.repository import NotificationRepository, ProfileRepository
from simskut.domain.value import NotificationId, NotificationType, UserId

from .base import Service
from .mention import extract_mentions


class NotificationService(Service):
    """Domain service for writing and reading notifications.

    Writing a notification row is all this service does for delivery; push
    messages are sent by the worker that consumes notification inserts.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        profile_repository: ProfileRepository,
        notification_settings: NotificationSettings,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            profile_repository: Profile repository used to resolve mentions
            notification_settings: Notification settings
        """
        self.notification_repository = notification_repository
        self.profile_repository = profile_repository
        self.notification_settings = notification_settings

    def _preview(self, content: str | None) -> str | None:
        if not content:
            return None
        return content[: self.notification_settings.preview_length]

    async def process_mentions(
        self,
        text: str,
        actor_id: UserId,
        notification_type: NotificationType,
        reference_id: str,
    ) -> list[Notification]:
        """Notify every user mentioned in `text`.

        Unknown usernames are ignored and the actor never notifies themselves.

        Args:
            text: Post or comment text
            actor_id: Author of the text
            notification_type: mention_post or mention_comment
            reference_id: Id of the post or comment

        Returns:
            The notifications written, one per distinct recipient
        """
        usernames = extract_mentions(text)
        if not usernames:
            return []

        with logfire.span(
            "notification_service.process_mentions",
            actor_id=str(actor_id),
            type=notification_type.value,
            mentions=len(usernames),
        ):
            profiles = await self.profile_repository.find_by_usernames(usernames)
            recipients = {p.id for p in profiles if p.id != actor_id}
            if not recipients:
                logfire.info("No mention recipients resolved", actor_id=str(actor_id))
                return []

            preview = self._preview(text)
            notifications = [
                Notification(
                    id=NotificationId(uuid4()),
                    user_id=recipient,
                    actor_id=actor_id,
                    type=notification_type,
                    content=preview,
                    reference_id=reference_id,
                    created_at=utcnow(),
                )
                for recipient in sorted(recipients, key=str)
            ]
            saved = await self.notification_repository.create_many(notifications)
            logfire.info(
                "Mention notifications created",
                actor_id=str(actor_id),
                recipients=len(saved),
            )
            return saved

    async def create_interaction_notification(
        self,
        recipient_id: UserId,
        actor_id: UserId,
        notification_type: NotificationType,
        reference_id: str,
        content: str | None = None,
    ) -> Notification | None:
        """Notify a user about a like, comment or friendship event.

        Args:
            recipient_id: User to notify
            actor_id: User who acted
            notification_type: Kind of interaction
            reference_id: Id of the affected entity
            content: Optional preview text

        Returns:
            The notification, or None when the actor is the recipient
        """
        if recipient_id == actor_id:
            return None

        with logfire.span(
            "notification_service.create_interaction_notification",
            recipient_id=str(recipient_id),
            type=notification_type.value,
        ):
            notification = Notification(
                id=NotificationId(uuid4()),
                user_id=recipient_id,
                actor_id=actor_id,
                type=notification_type,
                content=self._preview(content),
                reference_id=reference_id,
                created_at=utcnow(),
            )
            [saved] = await self.notification_repository.create_many([notification])
            logfire.info(
                "Interaction notification created",
                notification_id=str(saved.id),
                type=notification_type.value,
            )
            return saved

    async def list_notifications(self, user_id: UserId) -> list[NotificationView]:
        """Latest notifications for the recipient, newest first."""
        with logfire.span("notification_service.list_notifications", user_id=str(user_id)):
            return await self.notification_repository.list_for_user(
                user_id, self.notification_settings.list_limit
            )

    async def count_unread(self, user_id: UserId) -> int:
        """Number of unread notifications."""
        return await self.notification_repository.count_unread(user_id)

    async def mark_read(self, notification_id: NotificationId, user_id: UserId) -> bool:
        """Mark one notification as read."""
        with logfire.span(
            "notification_service.mark_read", notification_id=str(notification_id)
        ):
            return await self.notification_repository.mark_read(notification_id, user_id)

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark all of the recipient's notifications as read."""
        with logfire.span("notification_service.mark_all_read", user_id=str(user_id)):
            count = await self.notification_repository.mark_all_read(user_id)
            logfire.info("Notifications marked read", user_id=str(user_id), count=count)
            return count

    async def delete_notification(
        self, notification_id: NotificationId, user_id: UserId
    ) -> bool:
        """Delete one of the recipient's notifications."""
        with logfire.span(
            "notification_service.delete_notification",
            notification_id=str(notification_id),
        ):
            return await self.notification_repository.delete(notification_id, user_id)
