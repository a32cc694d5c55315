"""Mock push sender provider for testing."""

from dishka import Scope, provide

from simskut.adapter.webpush.sender import RecordingPushSender
from simskut.domain.service import PushSender
from simskut.util.di.infrastructure.push import PushProvider


class MockPushProvider(PushProvider):
    """Mock push provider recording messages instead of sending them."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_recording_push_sender(self) -> RecordingPushSender:
        """Provide recording push sender."""
        return RecordingPushSender()

    @provide(scope=Scope.APP)
    def get_push_sender(self, sender: RecordingPushSender) -> PushSender:
        """Expose the recording sender through the domain interface."""
        return sender
