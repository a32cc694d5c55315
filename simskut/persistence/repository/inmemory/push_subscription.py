"""In-memory push subscription repository for testing."""

from simskut.domain.model import PushSubscription
from simskut.domain.repository import PushSubscriptionRepository
from simskut.domain.value import UserId

from .store import InMemoryStore


class InMemoryPushSubscriptionRepository(PushSubscriptionRepository):
    """In-memory implementation of PushSubscriptionRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Insert, or refresh the keys of the existing (user_id, endpoint) row."""
        key = (subscription.user_id, subscription.endpoint)
        existing = self._store.push_subscriptions.get(key)
        if existing is not None:
            subscription = existing.model_copy(
                update={"p256dh": subscription.p256dh, "auth": subscription.auth}
            )
        self._store.push_subscriptions[key] = subscription
        return subscription

    async def list_for_user(self, user_id: UserId) -> list[PushSubscription]:
        """All of the user's device subscriptions."""
        return [
            s for (owner, _), s in self._store.push_subscriptions.items() if owner == user_id
        ]

    async def delete(self, user_id: UserId, endpoint: str) -> bool:
        """Remove a device subscription."""
        return self._store.push_subscriptions.pop((user_id, endpoint), None) is not None
