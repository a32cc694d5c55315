"""Realtime change feed infrastructure providers."""

from dishka import Scope, provide

from simskut.config import Settings
from simskut.domain.service import ChangeFeed
from simskut.persistence.realtime import PostgresChangeFeed
from simskut.util.di.base import ProviderBase


class RealtimeProvider(ProviderBase):
    """Change feed component base."""

    __mock_component__ = "realtime"
    __depends_on__ = {"persistence"}


class ProdRealtimeProvider(RealtimeProvider):
    """Production change feed over Postgres LISTEN/NOTIFY."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_change_feed(self, settings: Settings) -> ChangeFeed:
        """Provide the change feed; the app lifespan starts and stops it."""
        return PostgresChangeFeed(dsn=settings.database.listen_dsn)
