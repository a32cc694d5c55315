"""Profile repository interface."""

from abc import ABC, abstractmethod

from simskut.domain.model import Profile
from simskut.domain.value import PublicProfile, UserId


class ProfileRepository(ABC):
    """Repository for Profile entity.

    Defines the contract for profile persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Profile | None:
        """Find a profile by its user id.

        Args:
            user_id: Auth identity id

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Profile | None:
        """Find a profile by exact username (including any #tag).

        Args:
            username: Full username

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_usernames(self, usernames: list[str]) -> list[Profile]:
        """Resolve several usernames at once.

        Unknown usernames are simply absent from the result.

        Args:
            usernames: Full usernames

        Returns:
            Matching profiles, in no particular order
        """
        pass

    @abstractmethod
    async def search_by_username_prefix(self, prefix: str, limit: int) -> list[Profile]:
        """Case-insensitive username prefix search.

        Args:
            prefix: Leading characters of the username
            limit: Maximum number of results

        Returns:
            Matching profiles ordered by username
        """
        pass

    @abstractmethod
    async def find_public_profiles(
        self, user_ids: list[UserId]
    ) -> dict[UserId, PublicProfile]:
        """Load public fields for several users.

        Args:
            user_ids: Profile ids

        Returns:
            Mapping of id to public profile for the ids that exist
        """
        pass

    @abstractmethod
    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile.

        Args:
            profile: Profile to insert

        Returns:
            The created profile

        Raises:
            ProfileAlreadyExistsError: If the id or username is taken
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Replace an existing profile record.

        Args:
            profile: Full updated profile

        Returns:
            The saved profile

        Raises:
            ProfileAlreadyExistsError: If the new username is taken
        """
        pass

    @abstractmethod
    async def list_all(self, limit: int = 100, offset: int = 0) -> list[Profile]:
        """List profiles, newest first.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of profiles
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all profiles."""
        pass
