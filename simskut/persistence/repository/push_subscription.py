"""PostgreSQL implementation of PushSubscription repository."""

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from simskut.domain.model import PushSubscription
from simskut.domain.repository import PushSubscriptionRepository
from simskut.domain.value import UserId
from simskut.persistence.mappers import (
    push_subscription_to_dict,
    row_to_push_subscription,
)
from simskut.persistence.tables import push_subscriptions_table


class PostgresPushSubscriptionRepository(PushSubscriptionRepository):
    """PostgreSQL implementation of PushSubscriptionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Insert, or refresh the keys of the existing (user_id, endpoint) row."""
        stmt = (
            pg_insert(push_subscriptions_table)
            .values(**push_subscription_to_dict(subscription))
            .on_conflict_do_update(
                constraint="uq_push_subscriptions_user_endpoint",
                set_={"p256dh": subscription.p256dh, "auth": subscription.auth},
            )
            .returning(push_subscriptions_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        return row_to_push_subscription(dict(row))

    async def list_for_user(self, user_id: UserId) -> list[PushSubscription]:
        """All of the user's device subscriptions."""
        stmt = select(push_subscriptions_table).where(
            push_subscriptions_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return [row_to_push_subscription(dict(row)) for row in result.mappings().all()]

    async def delete(self, user_id: UserId, endpoint: str) -> bool:
        """Remove a device subscription."""
        stmt = delete(push_subscriptions_table).where(
            and_(
                push_subscriptions_table.c.user_id == user_id,
                push_subscriptions_table.c.endpoint == endpoint,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
