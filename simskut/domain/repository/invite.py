"""Invite repository interface."""

from abc import ABC, abstractmethod

from simskut.domain.model import Invite, InviteListing, InviteStats
from simskut.domain.value import InviteId, InviteStatus, UserId


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_latest_for_user(self, user_id: UserId) -> Invite | None:
        """Find the user's most recently created invite.

        Args:
            user_id: Owner of the invite

        Returns:
            The latest invite if any, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Args:
            invite: The invite to insert

        Returns:
            The created invite

        Raises:
            InviteAlreadyExistsError: If the user already holds a pending invite
            InviteCodeCollisionError: If the code is already taken
        """
        pass

    @abstractmethod
    async def save(self, invite: Invite) -> Invite:
        """Update an existing invite.

        Args:
            invite: The invite with updated fields

        Returns:
            The saved invite
        """
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def count_by_status(self) -> InviteStats:
        """Count invites per status."""
        pass
