"""Mock persistence providers for testing."""

from dishka import Scope, provide

from simskut.domain.repository import (
    CommentRepository,
    FriendshipRepository,
    InviteRepository,
    NotificationRepository,
    PostRepository,
    ProfileRepository,
    PushSubscriptionRepository,
)
from simskut.domain.service import ChangeFeed
from simskut.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryFriendshipRepository,
    InMemoryInviteRepository,
    InMemoryNotificationRepository,
    InMemoryPostRepository,
    InMemoryProfileRepository,
    InMemoryPushSubscriptionRepository,
    InMemoryStore,
)
from simskut.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The store is APP-scoped so that every request of one container sees the
    same rows; each test builds its own container, keeping tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide the shared in-memory tables."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, store: InMemoryStore) -> ProfileRepository:
        """Provide in-memory profile repository."""
        return InMemoryProfileRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_invite_repository(self, store: InMemoryStore) -> InviteRepository:
        """Provide in-memory invite repository."""
        return InMemoryInviteRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, store: InMemoryStore
    ) -> NotificationRepository:
        """Provide in-memory notification repository."""
        return InMemoryNotificationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(
        self, store: InMemoryStore, change_feed: ChangeFeed
    ) -> PostRepository:
        """Provide in-memory post repository publishing inserts to the change feed."""
        return InMemoryPostRepository(store, change_feed)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, store: InMemoryStore) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_friendship_repository(self, store: InMemoryStore) -> FriendshipRepository:
        """Provide in-memory friendship repository."""
        return InMemoryFriendshipRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_push_subscription_repository(
        self, store: InMemoryStore
    ) -> PushSubscriptionRepository:
        """Provide in-memory push subscription repository."""
        return InMemoryPushSubscriptionRepository(store)
