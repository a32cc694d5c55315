"""Push subscription use cases."""

from pydantic import BaseModel, Field

from simskut.config import PushSettings
from simskut.domain.service import PushDeliveryService
from simskut.domain.value import UserId


class SubscribePushRequest(BaseModel):
    """Browser PushSubscription fields."""

    user_id: UserId
    endpoint: str = Field(min_length=1)
    p256dh: str = Field(min_length=1)
    auth: str = Field(min_length=1)


class SubscribePushResponse(BaseModel):
    """Stored subscription id."""

    id: str
    endpoint: str


class SubscribePushUseCase:
    """Use case for registering a device for push."""

    def __init__(self, push_delivery_service: PushDeliveryService) -> None:
        """Initialize subscribe use case.

        Args:
            push_delivery_service: Push delivery domain service
        """
        self.push_delivery_service = push_delivery_service

    async def execute(self, request: SubscribePushRequest) -> SubscribePushResponse:
        """Upsert on (user_id, endpoint)."""
        subscription = await self.push_delivery_service.subscribe(
            request.user_id, request.endpoint, request.p256dh, request.auth
        )
        return SubscribePushResponse(
            id=str(subscription.id), endpoint=subscription.endpoint
        )


class UnsubscribePushUseCase:
    """Use case for unregistering a device."""

    def __init__(self, push_delivery_service: PushDeliveryService) -> None:
        """Initialize unsubscribe use case.

        Args:
            push_delivery_service: Push delivery domain service
        """
        self.push_delivery_service = push_delivery_service

    async def execute(self, user_id: UserId, endpoint: str) -> bool:
        """Remove the subscription; returns whether one existed."""
        return await self.push_delivery_service.unsubscribe(user_id, endpoint)


class VapidKeyResponse(BaseModel):
    """Public key the browser subscribes with."""

    public_key: str


class GetVapidKeyUseCase:
    """Use case exposing the VAPID public key."""

    def __init__(self, push_settings: PushSettings) -> None:
        """Initialize VAPID key use case.

        Args:
            push_settings: Push settings
        """
        self.push_settings = push_settings

    async def execute(self) -> VapidKeyResponse:
        """Return the configured public key."""
        return VapidKeyResponse(public_key=self.push_settings.vapid_public_key)
