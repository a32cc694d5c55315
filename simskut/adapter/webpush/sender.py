"""Web push sender backed by pywebpush."""

import asyncio
import json

import logfire
from pywebpush import WebPushException, webpush
from requests.exceptions import RequestException

from simskut.config import PushSettings
from simskut.domain.model import PushSubscription
from simskut.domain.service.push_service import PushMessage, PushSender, PushSendError


class WebPushSender(PushSender):
    """Signs messages with the VAPID key pair and posts them to push services."""

    def __init__(self, push_settings: PushSettings) -> None:
        """Initialize sender.

        Args:
            push_settings: VAPID keys and subject
        """
        self.vapid_private_key = push_settings.vapid_private_key.strip()
        self.vapid_claims = {"sub": push_settings.vapid_subject}

    async def send(self, subscription: PushSubscription, message: PushMessage) -> None:
        """Deliver one message.

        Raises:
            PushSendError: If keys are missing, or the push service rejects
                the message or cannot be reached
        """
        if not self.vapid_private_key:
            raise PushSendError("VAPID keys are not configured")

        data = json.dumps(message.to_payload())
        try:
            # pywebpush is synchronous
            await asyncio.to_thread(
                webpush,
                subscription_info=subscription.subscription_info(),
                data=data,
                vapid_private_key=self.vapid_private_key,
                vapid_claims=dict(self.vapid_claims),
            )
        except WebPushException as e:
            status_code = e.response.status_code if e.response is not None else None
            logfire.warn(
                "Push service rejected message",
                endpoint=subscription.endpoint,
                status_code=status_code,
                error=str(e),
            )
            raise PushSendError(str(e), status_code=status_code) from e
        except (RequestException, ValueError) as e:
            # Unreachable push service, timeout or malformed subscription keys
            logfire.warn(
                "Push delivery failed",
                endpoint=subscription.endpoint,
                error=str(e),
            )
            raise PushSendError(str(e), status_code=None) from e


class RecordingPushSender(PushSender):
    """Mock push sender for testing.

    Records every delivered message. Endpoints listed in `failures` raise
    PushSendError with the mapped status code.
    """

    def __init__(self) -> None:
        self.sent: list[tuple[str, PushMessage]] = []
        self.failures: dict[str, int | None] = {}

    def fail(self, endpoint: str, status_code: int | None = 500) -> None:
        """Make deliveries to `endpoint` fail."""
        self.failures[endpoint] = status_code

    async def send(self, subscription: PushSubscription, message: PushMessage) -> None:
        if subscription.endpoint in self.failures:
            status_code = self.failures[subscription.endpoint]
            raise PushSendError(
                f"Push service returned {status_code}", status_code=status_code
            )
        self.sent.append((subscription.endpoint, message))
