"""In-memory friendship repository for testing."""

from typing import Optional

from simskut.domain.error import ConflictError
from simskut.domain.model import Friendship
from simskut.domain.repository import FriendshipRepository
from simskut.domain.value import FriendshipId, FriendshipState, UserId

from .store import InMemoryStore


class InMemoryFriendshipRepository(FriendshipRepository):
    """In-memory implementation of FriendshipRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_id(self, friendship_id: FriendshipId) -> Optional[Friendship]:
        """Find a friendship row by ID."""
        return self._store.friendships.get(friendship_id)

    async def find_between(self, user_a: UserId, user_b: UserId) -> Optional[Friendship]:
        """Find the row linking two users in either direction."""
        for friendship in self._store.friendships.values():
            if friendship.involves(user_a) and friendship.other(user_a) == user_b:
                return friendship
        return None

    async def create(self, friendship: Friendship) -> Friendship:
        """Insert a friendship row.

        Raises:
            ConflictError: If the pair already has a row
        """
        if await self.find_between(friendship.requester_id, friendship.addressee_id):
            raise ConflictError("Friendship already exists for this pair")
        self._store.friendships[friendship.id] = friendship
        return friendship

    async def save(self, friendship: Friendship) -> Friendship:
        """Update an existing friendship row."""
        if friendship.id in self._store.friendships:
            self._store.friendships[friendship.id] = friendship
        return friendship

    async def delete(self, friendship_id: FriendshipId) -> None:
        """Delete a friendship row."""
        self._store.friendships.pop(friendship_id, None)

    async def list_accepted(self, user_id: UserId) -> list[Friendship]:
        """Accepted friendships involving the user, newest first."""
        rows = [
            f
            for f in self._store.friendships.values()
            if f.status == FriendshipState.ACCEPTED and f.involves(user_id)
        ]
        return sorted(rows, key=lambda f: f.created_at, reverse=True)

    async def list_incoming(self, user_id: UserId) -> list[Friendship]:
        """Pending requests addressed to the user, newest first."""
        rows = [
            f
            for f in self._store.friendships.values()
            if f.status == FriendshipState.PENDING and f.addressee_id == user_id
        ]
        return sorted(rows, key=lambda f: f.created_at, reverse=True)
