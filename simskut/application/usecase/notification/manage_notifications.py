"""Notification inbox actions: mark read, mark all read, delete."""

from pydantic import BaseModel

from simskut.domain.error import NotFoundError
from simskut.domain.service import NotificationService
from simskut.domain.value import NotificationId, UserId


class MarkAllReadResponse(BaseModel):
    """Number of notifications flipped to read."""

    updated: int


class MarkNotificationReadUseCase:
    """Use case for marking one notification read."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, notification_id: NotificationId, user_id: UserId) -> None:
        """Mark as read.

        Raises:
            NotFoundError: If the recipient has no such notification
        """
        if not await self.notification_service.mark_read(notification_id, user_id):
            raise NotFoundError("Notification", str(notification_id))


class MarkAllNotificationsReadUseCase:
    """Use case for clearing the unread badge."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark all read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, user_id: UserId) -> MarkAllReadResponse:
        """Mark every unread notification as read."""
        updated = await self.notification_service.mark_all_read(user_id)
        return MarkAllReadResponse(updated=updated)


class DeleteNotificationUseCase:
    """Use case for removing a notification from the inbox."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize delete notification use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, notification_id: NotificationId, user_id: UserId) -> None:
        """Delete the notification.

        Raises:
            NotFoundError: If the recipient has no such notification
        """
        deleted = await self.notification_service.delete_notification(
            notification_id, user_id
        )
        if not deleted:
            raise NotFoundError("Notification", str(notification_id))
