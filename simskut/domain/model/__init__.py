"""Domain model entities for SimsKut."""

from simskut.domain.model.friendship import Friendship
from simskut.domain.model.invite import Invite, InviteListing, InviteStats
from simskut.domain.model.notification import Notification, NotificationView
from simskut.domain.model.post import (
    FeedPost,
    FeedPostView,
    PostComment,
    PostCommentView,
)
from simskut.domain.model.profile import Profile
from simskut.domain.model.push_subscription import PushSubscription

__all__ = [
    "Profile",
    "Invite",
    "InviteListing",
    "InviteStats",
    "Notification",
    "NotificationView",
    "FeedPost",
    "FeedPostView",
    "PostComment",
    "PostCommentView",
    "Friendship",
    "PushSubscription",
]
