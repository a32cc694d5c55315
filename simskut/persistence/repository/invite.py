"""PostgreSQL implementation of Invite repository."""

from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from simskut.domain.error import (
    ConflictError,
    InviteAlreadyExistsError,
    InviteCodeCollisionError,
)
from simskut.domain.model import Invite, InviteListing, InviteStats
from simskut.domain.repository import InviteRepository
from simskut.domain.value import InviteId, InviteStatus, UserId
from simskut.persistence.mappers import (
    invite_to_dict,
    row_to_invite,
    row_to_public_profile,
)
from simskut.persistence.tables import invite_codes_table, profiles_table

CODE_CONSTRAINT = "uq_invite_codes_code"
PENDING_CONSTRAINT = "idx_invite_codes_unique_pending_user"


def _conflict_from(error: IntegrityError, invite: Invite) -> ConflictError:
    """Map a unique violation to the domain conflict it represents."""
    message = str(error.orig)
    if CODE_CONSTRAINT in message:
        return InviteCodeCollisionError(f"Invite code already taken: {invite.code}")
    if PENDING_CONSTRAINT in message:
        return InviteAlreadyExistsError(
            f"User {invite.used_by} already has a pending invite"
        )
    return ConflictError(message)


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID.

        Args:
            invite_id: Invite ID to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(invite_codes_table).where(invite_codes_table.c.id == invite_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_latest_for_user(self, user_id: UserId) -> Optional[Invite]:
        """Find the user's most recently created invite.

        Args:
            user_id: Owner of the invite

        Returns:
            Latest invite if any, None otherwise
        """
        stmt = (
            select(invite_codes_table)
            .where(invite_codes_table.c.used_by == user_id)
            .order_by(invite_codes_table.c.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def create(self, invite: Invite) -> Invite:
        """Insert a new invite inside a savepoint.

        Raises:
            InviteAlreadyExistsError: If the user already holds a pending invite
            InviteCodeCollisionError: If the code is already taken
        """
        stmt = insert(invite_codes_table).values(**invite_to_dict(invite))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise _conflict_from(e, invite) from e
        return invite

    async def save(self, invite: Invite) -> Invite:
        """Update an existing invite.

        Args:
            invite: Invite with updated fields

        Returns:
            Saved invite
        """
        values = invite_to_dict(invite)
        values.pop("id")
        stmt = (
            update(invite_codes_table)
            .where(invite_codes_table.c.id == invite.id)
            .values(**values)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return invite

    async def list_with_owner(
        self, status: InviteStatus | None = None, newest_first: bool = True
    ) -> list[InviteListing]:
        """List invites joined with the owner's public profile.

        Args:
            status: Optional status filter
            newest_first: Sort by created_at descending when True

        Returns:
            List of invite listings
        """
        order = (
            invite_codes_table.c.created_at.desc()
            if newest_first
            else invite_codes_table.c.created_at.asc()
        )
        stmt = (
            select(
                invite_codes_table,
                profiles_table.c.username.label("owner_username"),
                profiles_table.c.display_name.label("owner_display_name"),
                profiles_table.c.avatar_url.label("owner_avatar_url"),
            )
            .select_from(
                invite_codes_table.outerjoin(
                    profiles_table,
                    profiles_table.c.id == invite_codes_table.c.used_by,
                )
            )
            .order_by(order)
        )
        if status is not None:
            stmt = stmt.where(invite_codes_table.c.status == status.value)

        result = await self.session.execute(stmt)
        listings = []
        for row in result.mappings().all():
            data = dict(row)
            listings.append(
                InviteListing(
                    invite=row_to_invite(data),
                    owner=row_to_public_profile(data, prefix="owner_"),
                )
            )
        return listings

    async def count_by_status(self) -> InviteStats:
        """Count invites per status."""
        stmt = select(invite_codes_table.c.status, func.count()).group_by(
            invite_codes_table.c.status
        )
        result = await self.session.execute(stmt)
        counts = {status: count for status, count in result.all()}
        return InviteStats(
            pending=counts.get(InviteStatus.PENDING.value, 0),
            approved=counts.get(InviteStatus.APPROVED.value, 0),
            rejected=counts.get(InviteStatus.REJECTED.value, 0),
        )
