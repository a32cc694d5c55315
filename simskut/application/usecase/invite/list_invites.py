"""Admin invite listing use case."""

import logfire
from pydantic import BaseModel

from simskut.domain.model import InviteListing
from simskut.domain.service import InviteService, ProfileService
from simskut.domain.value import InviteFilter, UserId

from .get_my_invite import InviteResponse


class ListInvitesRequest(BaseModel):
    """Admin listing request."""

    admin_id: UserId
    filter: InviteFilter = InviteFilter.ALL
    review_queue: bool = False  # Pending only, oldest first


class InviteListingResponse(InviteResponse):
    """Invite with its owner's public profile."""

    owner_username: str | None
    owner_display_name: str | None
    owner_avatar_url: str | None

    @classmethod
    def from_listing(cls, listing: InviteListing) -> "InviteListingResponse":
        """Build from the joined read model."""
        owner = listing.owner
        return cls(
            **InviteResponse.from_invite(listing.invite).model_dump(),
            owner_username=owner.username if owner else None,
            owner_display_name=owner.display_name if owner else None,
            owner_avatar_url=owner.avatar_url if owner else None,
        )


class ListInvitesResponse(BaseModel):
    """Admin invite listing."""

    invites: list[InviteListingResponse]


class ListInvitesUseCase:
    """Use case for the admin invite manager."""

    def __init__(
        self, invite_service: InviteService, profile_service: ProfileService
    ) -> None:
        """Initialize list invites use case.

        Args:
            invite_service: Invite domain service
            profile_service: Profile domain service (admin check)
        """
        self.invite_service = invite_service
        self.profile_service = profile_service

    async def execute(self, request: ListInvitesRequest) -> ListInvitesResponse:
        """List invites for an admin.

        Raises:
            NotAuthorizedError: If the caller is not an admin
        """
        await self.profile_service.require_admin(request.admin_id, "list invites")
        if request.review_queue:
            listings = await self.invite_service.list_pending_invites()
        else:
            listings = await self.invite_service.list_all_invites(request.filter)
        logfire.info("Admin listed invites", count=len(listings))
        return ListInvitesResponse(
            invites=[InviteListingResponse.from_listing(item) for item in listings]
        )
