"""In-memory invite repository for testing."""

from typing import Optional

from simskut.domain.error import InviteAlreadyExistsError, InviteCodeCollisionError
from simskut.domain.model import Invite, InviteListing, InviteStats
from simskut.domain.repository import InviteRepository
from simskut.domain.value import InviteId, InviteStatus, UserId

from .store import InMemoryStore


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing.

    Enforces the same uniqueness rules as the database: unique codes and at
    most one pending invite per user.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _ordered(self, invites: list[Invite], newest_first: bool) -> list[Invite]:
        position = {invite_id: i for i, invite_id in enumerate(self._store.invites)}
        return sorted(
            invites,
            key=lambda inv: (inv.created_at, position[inv.id]),
            reverse=newest_first,
        )

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        return self._store.invites.get(invite_id)

    async def find_latest_for_user(self, user_id: UserId) -> Optional[Invite]:
        """Find the user's most recently created invite."""
        mine = [i for i in self._store.invites.values() if i.used_by == user_id]
        ordered = self._ordered(mine, newest_first=True)
        return ordered[0] if ordered else None

    async def create(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Raises:
            InviteCodeCollisionError: If the code is already taken
            InviteAlreadyExistsError: If the user already holds a pending invite
        """
        for existing in self._store.invites.values():
            if existing.code == invite.code:
                raise InviteCodeCollisionError(f"Invite code already taken: {invite.code}")
            if (
                existing.used_by == invite.used_by
                and existing.status == InviteStatus.PENDING
                and invite.status == InviteStatus.PENDING
            ):
                raise InviteAlreadyExistsError(
                    f"User {invite.used_by} already has a pending invite"
                )
        self._store.invites[invite.id] = invite
        return invite

    async def save(self, invite: Invite) -> Invite:
        """Update an existing invite."""
        if invite.id in self._store.invites:
            self._store.invites[invite.id] = invite
        return invite

    async def list_with_owner(
        self, status: InviteStatus | None = None, newest_first: bool = True
    ) -> list[InviteListing]:
        """List invites joined with the owner's public profile."""
        invites = [
            i
            for i in self._store.invites.values()
            if status is None or i.status == status
        ]
        return [
            InviteListing(invite=i, owner=self._store.public_profile(i.used_by))
            for i in self._ordered(invites, newest_first)
        ]

    async def count_by_status(self) -> InviteStats:
        """Count invites per status."""
        statuses = [i.status for i in self._store.invites.values()]
        return InviteStats(
            pending=statuses.count(InviteStatus.PENDING),
            approved=statuses.count(InviteStatus.APPROVED),
            rejected=statuses.count(InviteStatus.REJECTED),
        )
