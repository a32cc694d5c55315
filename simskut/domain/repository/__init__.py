"""Repository interfaces for SimsKut domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from simskut.domain.repository.friendship import FriendshipRepository
from simskut.domain.repository.invite import InviteRepository
from simskut.domain.repository.notification import NotificationRepository
from simskut.domain.repository.post import CommentRepository, PostRepository
from simskut.domain.repository.profile import ProfileRepository
from simskut.domain.repository.push_subscription import PushSubscriptionRepository

__all__ = [
    "ProfileRepository",
    "InviteRepository",
    "NotificationRepository",
    "PostRepository",
    "CommentRepository",
    "FriendshipRepository",
    "PushSubscriptionRepository",
]
