"""Push use cases."""

from .deliver_push import DeliverPushResponse, DeliverPushUseCase, NotificationWebhookPayload
from .manage_subscription import (
    GetVapidKeyUseCase,
    SubscribePushRequest,
    SubscribePushResponse,
    SubscribePushUseCase,
    UnsubscribePushUseCase,
    VapidKeyResponse,
)

__all__ = [
    "DeliverPushResponse",
    "DeliverPushUseCase",
    "GetVapidKeyUseCase",
    "NotificationWebhookPayload",
    "SubscribePushRequest",
    "SubscribePushResponse",
    "SubscribePushUseCase",
    "UnsubscribePushUseCase",
    "VapidKeyResponse",
]
