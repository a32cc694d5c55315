"""Web push infrastructure providers."""

from dishka import Scope, provide

from simskut.adapter.webpush.sender import WebPushSender
from simskut.config import PushSettings
from simskut.domain.service import PushSender
from simskut.util.di.base import ProviderBase


class PushProvider(ProviderBase):
    """Push sender component base."""

    __mock_component__ = "push"


class ProdPushProvider(PushProvider):
    """Production VAPID web push sender."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_push_sender(self, push_settings: PushSettings) -> PushSender:
        """Provide web push sender."""
        return WebPushSender(push_settings=push_settings)
