"""PostgreSQL repository implementations."""

from simskut.persistence.repository.friendship import PostgresFriendshipRepository
from simskut.persistence.repository.invite import PostgresInviteRepository
from simskut.persistence.repository.notification import (
    PostgresNotificationRepository,
)
from simskut.persistence.repository.post import (
    PostgresCommentRepository,
    PostgresPostRepository,
)
from simskut.persistence.repository.profile import PostgresProfileRepository
from simskut.persistence.repository.push_subscription import (
    PostgresPushSubscriptionRepository,
)

__all__ = [
    "PostgresProfileRepository",
    "PostgresInviteRepository",
    "PostgresNotificationRepository",
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresFriendshipRepository",
    "PostgresPushSubscriptionRepository",
]
