"""User search use case for mention autocomplete."""

from pydantic import BaseModel

from simskut.config import NotificationSettings
from simskut.domain.service import ProfileService
from simskut.domain.value import PublicProfile


class SearchUsersResponse(BaseModel):
    """Matching users."""

    users: list[PublicProfile]


class SearchUsersUseCase:
    """Use case for the @mention suggestion list."""

    def __init__(
        self,
        profile_service: ProfileService,
        notification_settings: NotificationSettings,
    ) -> None:
        """Initialize search users use case.

        Args:
            profile_service: Profile domain service
            notification_settings: Notification settings (result limit)
        """
        self.profile_service = profile_service
        self.notification_settings = notification_settings

    async def execute(self, prefix: str) -> SearchUsersResponse:
        """Case-insensitive username prefix match."""
        profiles = await self.profile_service.search_users(
            prefix, self.notification_settings.user_search_limit
        )
        return SearchUsersResponse(users=[p.to_public() for p in profiles])
