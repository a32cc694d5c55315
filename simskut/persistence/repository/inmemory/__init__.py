"""In-memory repository implementations for testing."""

from .friendship import InMemoryFriendshipRepository
from .invite import InMemoryInviteRepository
from .notification import InMemoryNotificationRepository
from .post import InMemoryCommentRepository, InMemoryPostRepository
from .profile import InMemoryProfileRepository
from .push_subscription import InMemoryPushSubscriptionRepository
from .store import InMemoryStore

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryFriendshipRepository",
    "InMemoryInviteRepository",
    "InMemoryNotificationRepository",
    "InMemoryPostRepository",
    "InMemoryProfileRepository",
    "InMemoryPushSubscriptionRepository",
    "InMemoryStore",
]
