"""Push delivery: turns notification inserts into browser push messages."""

from abc import ABC, abstractmethod
from uuid import UUID, uuid4

import logfire

from simskut.config import PushSettings
from simskut.domain.model import PushSubscription
from simskut.domain.model.common import utcnow
from simskut.domain.repository import PushSubscriptionRepository
from simskut.domain.value import NotificationType, PushSubscriptionId, UserId
from simskut.domain.value.common import ValueObject

from .base import Service

DEFAULT_TITLE = "Nova atividade no SimsKut"

PUSH_TITLES: dict[str, str] = {
    NotificationType.LIKE_POST.value: "Nova curtida no seu post",
    NotificationType.LIKE_PHOTO.value: "Nova curtida na sua foto",
    NotificationType.LIKE_COMMENT.value: "Nova curtida no seu comentário",
    NotificationType.COMMENT_POST.value: "Novo comentário no seu post",
    NotificationType.COMMENT_PHOTO.value: "Novo comentário na sua foto",
    NotificationType.MENTION_POST.value: "Você foi mencionado",
    NotificationType.MENTION_COMMENT.value: "Você foi mencionado",
    NotificationType.REACTION_POST.value: "Nova reação ao seu post",
    NotificationType.NEW_POST_FRIEND.value: "Novo post de um amigo",
    NotificationType.FRIEND_ACCEPT.value: "Pedido de amizade aceito",
    NotificationType.FAMILY_UPDATE.value: "Atualização em família amiga",
}


def push_title(notification_type: str) -> str:
    """Human-readable title for a notification type."""
    return PUSH_TITLES.get(notification_type, DEFAULT_TITLE)


class PushMessage(ValueObject):
    """Payload shown by the service worker."""

    title: str
    body: str
    tag: str = "simskut-notif"
    url: str = "/feed"
    reference_id: str | None = None

    def to_payload(self) -> dict:
        """JSON body delivered to the service worker."""
        return {
            "title": self.title,
            "body": self.body,
            "tag": self.tag,
            "data": {"url": self.url, "reference_id": self.reference_id},
        }


class PushSendError(Exception):
    """A push message could not be delivered to one subscription."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)

    @property
    def gone(self) -> bool:
        """The push service reports the subscription no longer exists."""
        return self.status_code in (404, 410)


class PushSender(ABC):
    """Sends one push message to one device subscription."""

    @abstractmethod
    async def send(self, subscription: PushSubscription, message: PushMessage) -> None:
        """Deliver a message.

        Raises:
            PushSendError: If the push service rejects the message
        """
        pass


class NotificationRecord(ValueObject):
    """Notification fields carried by the insert webhook."""

    id: str | None = None
    user_id: str
    type: str
    content: str | None = None
    reference_id: str | None = None


class DeliveryFailure(ValueObject):
    """One subscription that could not be reached."""

    endpoint: str
    error: str
    removed: bool = False


class DeliveryReport(ValueObject):
    """Outcome of delivering one notification."""

    sent: int = 0
    failures: list[DeliveryFailure] = []


class PushDeliveryService(Service):
    """Domain service for push subscriptions and delivery."""

    def __init__(
        self,
        push_subscription_repository: PushSubscriptionRepository,
        push_sender: PushSender,
        push_settings: PushSettings,
    ) -> None:
        """Initialize push delivery service.

        Args:
            push_subscription_repository: Push subscription repository
            push_sender: Web push sender
            push_settings: Push settings
        """
        self.push_subscription_repository = push_subscription_repository
        self.push_sender = push_sender
        self.push_settings = push_settings

    def build_message(self, record: NotificationRecord) -> PushMessage:
        """Title from the lookup table, body truncated to body_length."""
        limit = self.push_settings.body_length
        content = record.content or ""
        body = content if len(content) <= limit else f"{content[:limit]}..."
        return PushMessage(
            title=push_title(record.type),
            body=body,
            reference_id=record.reference_id,
        )

    async def deliver(self, record: NotificationRecord) -> DeliveryReport:
        """Push one notification to every device of its recipient.

        A failing subscription never stops the others. Subscriptions the push
        service reports as gone are removed.

        Args:
            record: Inserted notification

        Returns:
            Count of messages sent and the failures collected
        """
        with logfire.span(
            "push_service.deliver", user_id=record.user_id, type=record.type
        ):
            user_id = UserId(UUID(record.user_id))
            subscriptions = await self.push_subscription_repository.list_for_user(user_id)
            if not subscriptions:
                logfire.info("No push subscriptions", user_id=record.user_id)
                return DeliveryReport()

            message = self.build_message(record)
            sent = 0
            failures: list[DeliveryFailure] = []
            for subscription in subscriptions:
                try:
                    await self.push_sender.send(subscription, message)
                    sent += 1
                except PushSendError as e:
                    removed = False
                    if e.gone:
                        removed = await self.push_subscription_repository.delete(
                            subscription.user_id, subscription.endpoint
                        )
                    failures.append(
                        DeliveryFailure(
                            endpoint=subscription.endpoint, error=str(e), removed=removed
                        )
                    )

            if failures:
                logfire.warn(
                    "Push delivery partially failed",
                    user_id=record.user_id,
                    sent=sent,
                    failed=len(failures),
                )
            else:
                logfire.info("Push delivered", user_id=record.user_id, sent=sent)
            return DeliveryReport(sent=sent, failures=failures)

    async def subscribe(
        self, user_id: UserId, endpoint: str, p256dh: str, auth: str
    ) -> PushSubscription:
        """Register or refresh a device subscription."""
        with logfire.span("push_service.subscribe", user_id=str(user_id)):
            subscription = PushSubscription(
                id=PushSubscriptionId(uuid4()),
                user_id=user_id,
                endpoint=endpoint,
                p256dh=p256dh,
                auth=auth,
                created_at=utcnow(),
            )
            return await self.push_subscription_repository.upsert(subscription)

    async def unsubscribe(self, user_id: UserId, endpoint: str) -> bool:
        """Remove a device subscription."""
        with logfire.span("push_service.unsubscribe", user_id=str(user_id)):
            return await self.push_subscription_repository.delete(user_id, endpoint)
