"""Domain services."""

from .auth_service import AuthGateway, AuthListener, AuthService
from .base import Service
from .feed_service import FeedService
from .friendship_service import FriendshipService
from .gallery import GalleryItem, GalleryProxy, GalleryService
from .invite_service import InviteService
from .jwt_service import JWTService
from .notification_service import NotificationService
from .profile_service import ProfileService, ProfileUpdate
from .push_service import (
    NotificationRecord,
    PushDeliveryService,
    PushMessage,
    PushSender,
    PushSendError,
)
from .realtime import ChangeEvent, ChangeFeed, Subscription
from .storage import ObjectStorage

__all__ = [
    "AuthGateway",
    "AuthListener",
    "AuthService",
    "ChangeEvent",
    "ChangeFeed",
    "FeedService",
    "FriendshipService",
    "GalleryItem",
    "GalleryProxy",
    "GalleryService",
    "InviteService",
    "JWTService",
    "NotificationRecord",
    "NotificationService",
    "ObjectStorage",
    "ProfileService",
    "ProfileUpdate",
    "PushDeliveryService",
    "PushMessage",
    "PushSendError",
    "PushSender",
    "Service",
    "Subscription",
]
