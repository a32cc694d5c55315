"""List notifications use case."""

from datetime import datetime

from pydantic import BaseModel

from simskut.domain.model import NotificationView
from simskut.domain.service import NotificationService
from simskut.domain.value import NotificationType, PublicProfile, UserId


class NotificationResponse(BaseModel):
    """Notification with the actor's public profile."""

    id: str
    type: NotificationType
    actor_id: str | None
    actor: PublicProfile | None
    content: str | None
    reference_id: str | None
    read: bool
    created_at: datetime

    @classmethod
    def from_view(cls, view: NotificationView) -> "NotificationResponse":
        """Build from the joined read model."""
        notification = view.notification
        return cls(
            id=str(notification.id),
            type=notification.type,
            actor_id=str(notification.actor_id) if notification.actor_id else None,
            actor=view.actor,
            content=notification.content,
            reference_id=notification.reference_id,
            read=notification.read,
            created_at=notification.created_at,
        )


class ListNotificationsResponse(BaseModel):
    """Inbox page and unread badge count."""

    notifications: list[NotificationResponse]
    unread_count: int


class ListNotificationsUseCase:
    """Use case for the notification panel."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize list notifications use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, user_id: UserId) -> ListNotificationsResponse:
        """Latest notifications, newest first, with the unread count."""
        views = await self.notification_service.list_notifications(user_id)
        unread = await self.notification_service.count_unread(user_id)
        return ListNotificationsResponse(
            notifications=[NotificationResponse.from_view(v) for v in views],
            unread_count=unread,
        )
