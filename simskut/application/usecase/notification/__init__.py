"""Notification use cases."""

from .list_notifications import (
    ListNotificationsResponse,
    ListNotificationsUseCase,
    NotificationResponse,
)
from .manage_notifications import (
    DeleteNotificationUseCase,
    MarkAllNotificationsReadUseCase,
    MarkAllReadResponse,
    MarkNotificationReadUseCase,
)

__all__ = [
    "DeleteNotificationUseCase",
    "ListNotificationsResponse",
    "ListNotificationsUseCase",
    "MarkAllNotificationsReadUseCase",
    "MarkAllReadResponse",
    "MarkNotificationReadUseCase",
    "NotificationResponse",
]
