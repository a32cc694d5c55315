"""Push subscription repository interface."""

from abc import ABC, abstractmethod

from simskut.domain.model import PushSubscription
from simskut.domain.value import UserId


class PushSubscriptionRepository(ABC):
    """Repository for PushSubscription entity."""

    @abstractmethod
    async def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Insert or refresh keys of the (user_id, endpoint) subscription.

        Args:
            subscription: Subscription to store

        Returns:
            The stored subscription
        """
        pass

    @abstractmethod
    async def list_for_user(self, user_id: UserId) -> list[PushSubscription]:
        """All of the user's device subscriptions."""
        pass

    @abstractmethod
    async def delete(self, user_id: UserId, endpoint: str) -> bool:
        """Remove a device subscription.

        Returns:
            True if a subscription was removed
        """
        pass
