"""Shared in-memory tables for the in-memory repositories."""

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
    InviteId,
    NotificationId,
    PostId,
    PublicProfile,
    UserId,
)


class InMemoryStore:
    """Rows of every table, keyed by primary key.

    Repositories share one store so joined read models (post authors,
    notification actors, invite owners) resolve the way SQL joins do.
    Dicts keep insertion order, which breaks created_at ties.
    """

    def __init__(self) -> None:
        self.profiles: dict[UserId, Profile] = {}
        self.invites: dict[InviteId, Invite] = {}
        self.notifications: dict[NotificationId, Notification] = {}
        self.posts: dict[PostId, FeedPost] = {}
        self.likes: set[tuple[PostId, UserId]] = set()
        self.comments: dict[CommentId, PostComment] = {}
        self.friendships: dict[FriendshipId, Friendship] = {}
        self.push_subscriptions: dict[tuple[UserId, str], PushSubscription] = {}

    def public_profile(self, user_id: UserId | None) -> PublicProfile | None:
        """Public fields of a profile, or None if it does not exist."""
        if user_id is None:
            return None
        profile = self.profiles.get(user_id)
        return profile.to_public() if profile else None
