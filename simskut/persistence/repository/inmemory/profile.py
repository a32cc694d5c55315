"""In-memory profile repository for testing."""

from typing import Optional

from simskut.domain.error import ProfileAlreadyExistsError
from simskut.domain.model import Profile
from simskut.domain.repository import ProfileRepository
from simskut.domain.value import PublicProfile, UserId

from .store import InMemoryStore


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _username_taken(self, username: str, by: UserId) -> bool:
        return any(
            p.username.root == username and p.id != by
            for p in self._store.profiles.values()
        )

    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        """Find a profile by its user id."""
        return self._store.profiles.get(user_id)

    async def find_by_username(self, username: str) -> Optional[Profile]:
        """Find a profile by exact username."""
        for profile in self._store.profiles.values():
            if profile.username.root == username:
                return profile
        return None

    async def find_by_usernames(self, usernames: list[str]) -> list[Profile]:
        """Resolve several usernames at once."""
        wanted = set(usernames)
        return [p for p in self._store.profiles.values() if p.username.root in wanted]

    async def search_by_username_prefix(self, prefix: str, limit: int) -> list[Profile]:
        """Case-insensitive prefix search ordered by username."""
        prefix = prefix.lower()
        matches = [
            p
            for p in self._store.profiles.values()
            if p.username.root.lower().startswith(prefix)
        ]
        matches.sort(key=lambda p: p.username.root)
        return matches[:limit]

    async def find_public_profiles(
        self, user_ids: list[UserId]
    ) -> dict[UserId, PublicProfile]:
        """Load public fields for several users."""
        return {
            user_id: self._store.profiles[user_id].to_public()
            for user_id in user_ids
            if user_id in self._store.profiles
        }

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile.

        Raises:
            ProfileAlreadyExistsError: If the id or username is taken
        """
        if profile.id in self._store.profiles or self._username_taken(
            profile.username.root, profile.id
        ):
            raise ProfileAlreadyExistsError(
                f"Profile already exists: {profile.id} / {profile.username}"
            )
        self._store.profiles[profile.id] = profile
        return profile

    async def save(self, profile: Profile) -> Profile:
        """Replace an existing profile record.

        Raises:
            ProfileAlreadyExistsError: If the new username is taken
        """
        if self._username_taken(profile.username.root, profile.id):
            raise ProfileAlreadyExistsError(f"Username already taken: {profile.username}")
        if profile.id in self._store.profiles:
            self._store.profiles[profile.id] = profile
        return profile

    async def list_all(self, limit: int = 100, offset: int = 0) -> list[Profile]:
        """List profiles, newest first."""
        profiles = sorted(
            self._store.profiles.values(), key=lambda p: p.created_at, reverse=True
        )
        return profiles[offset : offset + limit]

    async def count(self) -> int:
        """Count all profiles."""
        return len(self._store.profiles)
