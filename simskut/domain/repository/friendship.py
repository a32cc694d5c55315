"""Friendship repository interface."""

from abc import ABC, abstractmethod

from simskut.domain.model import Friendship
from simskut.domain.value import FriendshipId, UserId


class FriendshipRepository(ABC):
    """Repository for Friendship entity."""

    @abstractmethod
    async def find_by_id(self, friendship_id: FriendshipId) -> Friendship | None:
        """Find a friendship row by ID."""
        pass

    @abstractmethod
    async def find_between(self, user_a: UserId, user_b: UserId) -> Friendship | None:
        """Find the friendship row linking two users in either direction."""
        pass

    @abstractmethod
    async def create(self, friendship: Friendship) -> Friendship:
        """Insert a friendship row.

        Raises:
            ConflictError: If the pair already has a row
        """
        pass

    @abstractmethod
    async def save(self, friendship: Friendship) -> Friendship:
        """Update an existing friendship row."""
        pass

    @abstractmethod
    async def delete(self, friendship_id: FriendshipId) -> None:
        """Delete a friendship row."""
        pass

    @abstractmethod
    async def list_accepted(self, user_id: UserId) -> list[Friendship]:
        """Accepted friendships involving the user."""
        pass

    @abstractmethod
    async def list_incoming(self, user_id: UserId) -> list[Friendship]:
        """Pending requests addressed to the user."""
        pass
