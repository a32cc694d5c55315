"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from simskut.domain.model import (
    FeedPost,
    Friendship,
    Invite,
    Notification,
    PostComment,
    Profile,
    PushSubscription,
)
from simskut.domain.value import (
    CommentId,
    FriendshipId,
    FriendshipState,
    InviteCode,
    InviteId,
    InviteStatus,
    NotificationId,
    NotificationType,
    PostId,
    PublicProfile,
    PushSubscriptionId,
    UserId,
    Username,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return None if value is None else _uuid(value)


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model.

    Args:
        row: Database row as dict

    Returns:
        Profile domain model
    """
    return Profile(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        display_name=row["display_name"],
        avatar_url=row.get("avatar_url"),
        banner_url=row.get("banner_url"),
        bio=row.get("bio"),
        website_url=row.get("website_url"),
        is_admin=row.get("is_admin", False),
        invite_code_used=row.get("invite_code_used"),
        tag_changed=row.get("tag_changed", False),
        zen_background=row.get("zen_background"),
        created_at=row["created_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict.

    Args:
        profile: Profile domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return profile.model_dump()


def row_to_public_profile(row: Dict[str, Any], prefix: str = "") -> Optional[PublicProfile]:
    """Build the embedded public profile from joined columns.

    Args:
        row: Joined row as dict
        prefix: Label prefix of the profile columns, e.g. "author_"

    Returns:
        Public profile, or None when the outer join found no profile
    """
    username = row.get(f"{prefix}username")
    if username is None:
        return None
    return PublicProfile(
        username=username,
        display_name=row.get(f"{prefix}display_name") or username,
        avatar_url=row.get(f"{prefix}avatar_url"),
    )


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model."""
    approved_by = _optional_uuid(row.get("approved_by"))
    return Invite(
        id=InviteId(_uuid(row["id"])),
        code=InviteCode(row["code"]),
        used_by=UserId(_uuid(row["used_by"])),
        status=InviteStatus(row["status"]),
        approved_by=UserId(approved_by) if approved_by else None,
        approved_at=row.get("approved_at"),
        created_at=row["created_at"],
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict."""
    data = invite.model_dump()
    data["status"] = invite.status.value
    return data


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    actor_id = _optional_uuid(row.get("actor_id"))
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        actor_id=UserId(actor_id) if actor_id else None,
        type=NotificationType(row["type"]),
        content=row.get("content"),
        reference_id=row.get("reference_id"),
        read=row.get("read", False),
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump()
    data["type"] = notification.type.value
    return data


def row_to_post(row: Dict[str, Any]) -> FeedPost:
    """Convert database row to FeedPost domain model."""
    return FeedPost(
        id=PostId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row.get("content"),
        image_urls=list(row.get("image_urls") or []),
        created_at=row["created_at"],
    )


def post_to_dict(post: FeedPost) -> Dict[str, Any]:
    """Convert FeedPost domain model to database dict."""
    return post.model_dump()


def row_to_comment(row: Dict[str, Any]) -> PostComment:
    """Convert database row to PostComment domain model."""
    return PostComment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: PostComment) -> Dict[str, Any]:
    """Convert PostComment domain model to database dict."""
    return comment.model_dump()


def row_to_friendship(row: Dict[str, Any]) -> Friendship:
    """Convert database row to Friendship domain model."""
    return Friendship(
        id=FriendshipId(_uuid(row["id"])),
        requester_id=UserId(_uuid(row["requester_id"])),
        addressee_id=UserId(_uuid(row["addressee_id"])),
        status=FriendshipState(row["status"]),
        created_at=row["created_at"],
    )


def friendship_to_dict(friendship: Friendship) -> Dict[str, Any]:
    """Convert Friendship domain model to database dict."""
    data = friendship.model_dump()
    data["status"] = friendship.status.value
    return data


def row_to_push_subscription(row: Dict[str, Any]) -> PushSubscription:
    """Convert database row to PushSubscription domain model."""
    return PushSubscription(
        id=PushSubscriptionId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        endpoint=row["endpoint"],
        p256dh=row["p256dh"],
        auth=row["auth"],
        created_at=row["created_at"],
    )


def push_subscription_to_dict(subscription: PushSubscription) -> Dict[str, Any]:
    """Convert PushSubscription domain model to database dict."""
    return subscription.model_dump()
