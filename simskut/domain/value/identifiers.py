"""Strongly typed identifiers for SimsKut domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Profile ids are the auth provider's user ids
UserId = NewType("UserId", UUID)
InviteId = NewType("InviteId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
NotificationId = NewType("NotificationId", UUID)
FriendshipId = NewType("FriendshipId", UUID)
PushSubscriptionId = NewType("PushSubscriptionId", UUID)
