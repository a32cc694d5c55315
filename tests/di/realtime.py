"""Mock change feed provider for testing."""

from dishka import Scope, provide

from simskut.domain.service import ChangeFeed
from simskut.persistence.realtime import InMemoryChangeFeed
from simskut.util.di.infrastructure.realtime import RealtimeProvider


class MockRealtimeProvider(RealtimeProvider):
    """Mock change feed delivering inserts in-process."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_in_memory_change_feed(self) -> InMemoryChangeFeed:
        """Provide in-memory change feed."""
        return InMemoryChangeFeed()

    @provide(scope=Scope.APP)
    def get_change_feed(self, change_feed: InMemoryChangeFeed) -> ChangeFeed:
        """Expose the in-memory feed through the domain interface."""
        return change_feed
