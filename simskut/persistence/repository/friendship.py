"""PostgreSQL implementation of Friendship repository."""

from typing import Optional

from sqlalchemy import and_, delete, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from simskut.domain.error import ConflictError
from simskut.domain.model import Friendship
from simskut.domain.repository import FriendshipRepository
from simskut.domain.value import FriendshipId, FriendshipState, UserId
from simskut.persistence.mappers import friendship_to_dict, row_to_friendship
from simskut.persistence.tables import friendships_table


class PostgresFriendshipRepository(FriendshipRepository):
    """PostgreSQL implementation of FriendshipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, friendship_id: FriendshipId) -> Optional[Friendship]:
        """Find a friendship row by ID."""
        stmt = select(friendships_table).where(friendships_table.c.id == friendship_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_friendship(dict(row)) if row else None

    async def find_between(self, user_a: UserId, user_b: UserId) -> Optional[Friendship]:
        """Find the row linking two users in either direction."""
        stmt = select(friendships_table).where(
            or_(
                and_(
                    friendships_table.c.requester_id == user_a,
                    friendships_table.c.addressee_id == user_b,
                ),
                and_(
                    friendships_table.c.requester_id == user_b,
                    friendships_table.c.addressee_id == user_a,
                ),
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_friendship(dict(row)) if row else None

    async def create(self, friendship: Friendship) -> Friendship:
        """Insert a friendship row.

        Raises:
            ConflictError: If the pair already has a row
        """
        stmt = insert(friendships_table).values(**friendship_to_dict(friendship))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictError("Friendship already exists for this pair") from e
        return friendship

    async def save(self, friendship: Friendship) -> Friendship:
        """Update an existing friendship row."""
        stmt = (
            update(friendships_table)
            .where(friendships_table.c.id == friendship.id)
            .values(status=friendship.status.value)
        )
        await self.session.execute(stmt)
        return friendship

    async def delete(self, friendship_id: FriendshipId) -> None:
        """Delete a friendship row."""
        stmt = delete(friendships_table).where(friendships_table.c.id == friendship_id)
        await self.session.execute(stmt)

    async def list_accepted(self, user_id: UserId) -> list[Friendship]:
        """Accepted friendships involving the user, newest first."""
        stmt = (
            select(friendships_table)
            .where(
                and_(
                    friendships_table.c.status == FriendshipState.ACCEPTED.value,
                    or_(
                        friendships_table.c.requester_id == user_id,
                        friendships_table.c.addressee_id == user_id,
                    ),
                )
            )
            .order_by(friendships_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_friendship(dict(row)) for row in result.mappings().all()]

    async def list_incoming(self, user_id: UserId) -> list[Friendship]:
        """Pending requests addressed to the user, newest first."""
        stmt = (
            select(friendships_table)
            .where(
                and_(
                    friendships_table.c.status == FriendshipState.PENDING.value,
                    friendships_table.c.addressee_id == user_id,
                )
            )
            .order_by(friendships_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_friendship(dict(row)) for row in result.mappings().all()]
