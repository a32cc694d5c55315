"""Browser push subscription entity."""

from datetime import datetime

from pydantic import Field

from simskut.domain.model.common import DomainModel, utcnow
from simskut.domain.value import PushSubscriptionId, UserId


class PushSubscription(DomainModel):
    """Web push endpoint registered by one of the user's devices.

    Unique per (user_id, endpoint).
    """

    id: PushSubscriptionId
    user_id: UserId
    endpoint: str
    p256dh: str
    auth: str
    created_at: datetime = Field(default_factory=utcnow)

    def subscription_info(self) -> dict:
        """Subscription in the shape expected by web push libraries."""
        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }
