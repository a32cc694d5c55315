"""Get profile use case."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from simskut.domain.model import Profile
from simskut.domain.service import FriendshipService, ProfileService
from simskut.domain.value import FriendshipStatus, UserId


class ProfileResponse(BaseModel):
    """Public profile page data."""

    id: str
    username: str
    display_name: str
    avatar_url: str | None
    banner_url: str | None
    bio: str | None
    website_url: str | None
    is_admin: bool
    tag_changed: bool
    zen_background: dict[str, Any] | None
    created_at: datetime

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        """Build from the domain entity."""
        return cls(
            id=str(profile.id),
            username=profile.username.root,
            display_name=profile.display_name,
            avatar_url=profile.avatar_url,
            banner_url=profile.banner_url,
            bio=profile.bio,
            website_url=profile.website_url,
            is_admin=profile.is_admin,
            tag_changed=profile.tag_changed,
            zen_background=profile.zen_background,
            created_at=profile.created_at,
        )


class GetProfileResponse(BaseModel):
    """Profile with the viewer's friendship status."""

    profile: ProfileResponse
    friendship_status: FriendshipStatus


class GetProfileUseCase:
    """Use case for viewing a profile page."""

    def __init__(
        self, profile_service: ProfileService, friendship_service: FriendshipService
    ) -> None:
        """Initialize get profile use case.

        Args:
            profile_service: Profile domain service
            friendship_service: Friendship domain service
        """
        self.profile_service = profile_service
        self.friendship_service = friendship_service

    async def execute(self, username: str, viewer_id: UserId) -> GetProfileResponse:
        """Look up by username.

        Raises:
            NotFoundError: If no profile has this username
        """
        profile = await self.profile_service.get_by_username(username)
        if profile.id == viewer_id:
            status = FriendshipStatus.NONE
        else:
            status = await self.friendship_service.get_status(viewer_id, profile.id)
        return GetProfileResponse(
            profile=ProfileResponse.from_profile(profile), friendship_status=status
        )
