"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from simskut.config import Settings
from simskut.domain.repository import (
    CommentRepository,
    FriendshipRepository,
    InviteRepository,
    NotificationRepository,
    PostRepository,
    ProfileRepository,
    PushSubscriptionRepository,
)
from simskut.persistence.database import create_engine, create_session_factory
from simskut.persistence.repository import (
    PostgresCommentRepository,
    PostgresFriendshipRepository,
    PostgresInviteRepository,
    PostgresNotificationRepository,
    PostgresPostRepository,
    PostgresProfileRepository,
    PostgresPushSubscriptionRepository,
)
from simskut.util.di.base import ProviderBase
from simskut.util.observability import instrument_sqlalchemy
from simskut.util.tasks import JobOutbox


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession], outbox: JobOutbox
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed when the request scope closes cleanly and
        rolled back when dishka sends the scope's exception in. The outbox
        is resolved first, so it is finalized after this session and only
        releases its jobs once the commit has gone through.
        """
        async with session_factory() as session:
            exception = yield session
            if exception is not None:
                logfire.warn("Session rollback", error=str(exception))
                await session.rollback()
                return
            try:
                await session.commit()
            except Exception as e:
                logfire.error("Session commit failed", error=str(e))
                outbox.discard()
                raise
            logfire.info("Session committed")

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, session: AsyncSession) -> ProfileRepository:
        """Provide Profile repository."""
        return PostgresProfileRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invite_repository(self, session: AsyncSession) -> InviteRepository:
        """Provide Invite repository."""
        return PostgresInviteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, session: AsyncSession
    ) -> NotificationRepository:
        """Provide Notification repository."""
        return PostgresNotificationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_friendship_repository(self, session: AsyncSession) -> FriendshipRepository:
        """Provide Friendship repository."""
        return PostgresFriendshipRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_push_subscription_repository(
        self, session: AsyncSession
    ) -> PushSubscriptionRepository:
        """Provide PushSubscription repository."""
        return PostgresPushSubscriptionRepository(session)
