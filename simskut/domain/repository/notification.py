"""Notification repository interface."""

from abc import ABC, abstractmethod

from simskut.domain.model import Notification, NotificationView
from simskut.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def create_many(self, notifications: list[Notification]) -> list[Notification]:
        """Insert notifications in one batch.

        Args:
            notifications: Notifications to insert

        Returns:
            The inserted notifications
        """
        pass

    @abstractmethod
    async def list_for_user(self, user_id: UserId, limit: int) -> list[NotificationView]:
        """List the recipient's latest notifications with actor profiles.

        Args:
            user_id: Recipient
            limit: Maximum number of results

        Returns:
            Notifications, newest first
        """
        pass

    @abstractmethod
    async def count_unread(self, user_id: UserId) -> int:
        """Count the recipient's unread notifications."""
        pass

    @abstractmethod
    async def mark_read(self, notification_id: NotificationId, user_id: UserId) -> bool:
        """Mark one of the recipient's notifications as read.

        Returns:
            True if a notification was updated
        """
        pass

    @abstractmethod
    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every unread notification of the recipient as read.

        Returns:
            Number of notifications updated
        """
        pass

    @abstractmethod
    async def delete(self, notification_id: NotificationId, user_id: UserId) -> bool:
        """Delete one of the recipient's notifications.

        Returns:
            True if a notification was deleted
        """
        pass
