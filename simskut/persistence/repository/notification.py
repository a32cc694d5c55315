"""PostgreSQL implementation of Notification repository."""

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from simskut.domain.model import Notification, NotificationView
from simskut.domain.repository import NotificationRepository
from simskut.domain.value import NotificationId, UserId
from simskut.persistence.mappers import (
    notification_to_dict,
    row_to_notification,
    row_to_public_profile,
)
from simskut.persistence.tables import notifications_table, profiles_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create_many(self, notifications: list[Notification]) -> list[Notification]:
        """Insert notifications in one statement."""
        if not notifications:
            return []
        stmt = insert(notifications_table).values(
            [notification_to_dict(n) for n in notifications]
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return notifications

    async def list_for_user(self, user_id: UserId, limit: int) -> list[NotificationView]:
        """Latest notifications with the actor's public profile."""
        stmt = (
            select(
                notifications_table,
                profiles_table.c.username.label("actor_username"),
                profiles_table.c.display_name.label("actor_display_name"),
                profiles_table.c.avatar_url.label("actor_avatar_url"),
            )
            .select_from(
                notifications_table.outerjoin(
                    profiles_table,
                    profiles_table.c.id == notifications_table.c.actor_id,
                )
            )
            .where(notifications_table.c.user_id == user_id)
            .order_by(notifications_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        views = []
        for row in result.mappings().all():
            data = dict(row)
            views.append(
                NotificationView(
                    notification=row_to_notification(data),
                    actor=row_to_public_profile(data, prefix="actor_"),
                )
            )
        return views

    async def count_unread(self, user_id: UserId) -> int:
        """Count the recipient's unread notifications."""
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(
                and_(
                    notifications_table.c.user_id == user_id,
                    notifications_table.c.read.is_(False),
                )
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def mark_read(self, notification_id: NotificationId, user_id: UserId) -> bool:
        """Mark one notification as read."""
        stmt = (
            update(notifications_table)
            .where(
                and_(
                    notifications_table.c.id == notification_id,
                    notifications_table.c.user_id == user_id,
                )
            )
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every unread notification as read."""
        stmt = (
            update(notifications_table)
            .where(
                and_(
                    notifications_table.c.user_id == user_id,
                    notifications_table.c.read.is_(False),
                )
            )
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete(self, notification_id: NotificationId, user_id: UserId) -> bool:
        """Delete one of the recipient's notifications."""
        stmt = delete(notifications_table).where(
            and_(
                notifications_table.c.id == notification_id,
                notifications_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
