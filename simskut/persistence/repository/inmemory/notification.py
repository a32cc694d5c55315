"""In-memory notification repository for testing."""

from simskut.domain.model import Notification, NotificationView
from simskut.domain.repository import NotificationRepository
from simskut.domain.value import NotificationId, UserId

from .store import InMemoryStore


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _owned(self, notification_id: NotificationId, user_id: UserId) -> Notification | None:
        notification = self._store.notifications.get(notification_id)
        if notification is None or notification.user_id != user_id:
            return None
        return notification

    async def create_many(self, notifications: list[Notification]) -> list[Notification]:
        """Insert notifications in one batch."""
        for notification in notifications:
            self._store.notifications[notification.id] = notification
        return notifications

    async def list_for_user(self, user_id: UserId, limit: int) -> list[NotificationView]:
        """Latest notifications with actor profiles, newest first."""
        mine = [n for n in self._store.notifications.values() if n.user_id == user_id]
        # Stable sort keeps later inserts first on equal timestamps
        mine.reverse()
        mine.sort(key=lambda n: n.created_at, reverse=True)
        return [
            NotificationView(notification=n, actor=self._store.public_profile(n.actor_id))
            for n in mine[:limit]
        ]

    async def count_unread(self, user_id: UserId) -> int:
        """Count the recipient's unread notifications."""
        return sum(
            1
            for n in self._store.notifications.values()
            if n.user_id == user_id and not n.read
        )

    async def mark_read(self, notification_id: NotificationId, user_id: UserId) -> bool:
        """Mark one notification as read."""
        notification = self._owned(notification_id, user_id)
        if notification is None:
            return False
        self._store.notifications[notification_id] = notification.model_copy(
            update={"read": True}
        )
        return True

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every unread notification as read."""
        count = 0
        for notification_id, n in list(self._store.notifications.items()):
            if n.user_id == user_id and not n.read:
                self._store.notifications[notification_id] = n.model_copy(
                    update={"read": True}
                )
                count += 1
        return count

    async def delete(self, notification_id: NotificationId, user_id: UserId) -> bool:
        """Delete one of the recipient's notifications."""
        if self._owned(notification_id, user_id) is None:
            return False
        del self._store.notifications[notification_id]
        return True
