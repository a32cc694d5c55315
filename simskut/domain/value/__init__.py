"""Domain value objects for SimsKut."""

from simskut.domain.value.identifiers import (
    CommentId,
    FriendshipId,
    InviteId,
    NotificationId,
    PostId,
    PushSubscriptionId,
    UserId,
)
from simskut.domain.value.types import (
    INVITE_CODE_ALPHABET,
    AppRoute,
    ApprovalStatus,
    AuthEventType,
    AuthIdentity,
    AuthSession,
    FriendshipState,
    FriendshipStatus,
    InviteCode,
    InviteFilter,
    InviteStatus,
    NotificationType,
    OAuthProvider,
    OAuthRedirect,
    PublicProfile,
    Username,
)

__all__ = [
    # Identifiers
    "UserId",
    "InviteId",
    "PostId",
    "CommentId",
    "NotificationId",
    "FriendshipId",
    "PushSubscriptionId",
    # Types
    "INVITE_CODE_ALPHABET",
    "AppRoute",
    "ApprovalStatus",
    "AuthEventType",
    "AuthIdentity",
    "AuthSession",
    "FriendshipState",
    "FriendshipStatus",
    "InviteCode",
    "InviteFilter",
    "InviteStatus",
    "NotificationType",
    "OAuthProvider",
    "OAuthRedirect",
    "PublicProfile",
    "Username",
]
