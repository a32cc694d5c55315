"""Admin invite review use cases."""

import logfire
from pydantic import BaseModel

from simskut.domain.error import DomainError
from simskut.domain.service import InviteService, ProfileService
from simskut.domain.value import InviteId, UserId

from .get_my_invite import InviteResponse


class ReviewInviteRequest(BaseModel):
    """Approve or reject request."""

    invite_id: InviteId
    admin_id: UserId


class ApproveInviteUseCase:
    """Use case for approving a pending invite."""

    def __init__(
        self, invite_service: InviteService, profile_service: ProfileService
    ) -> None:
        """Initialize approve invite use case.

        Args:
            invite_service: Invite domain service
            profile_service: Profile domain service
        """
        self.invite_service = invite_service
        self.profile_service = profile_service

    async def execute(self, request: ReviewInviteRequest) -> InviteResponse:
        """Approve the invite and record the code on the owner's profile.

        The profile write is best-effort; the owner's pending screen
        reconciles it again on its next check.

        Raises:
            NotAuthorizedError: If the caller is not an admin
            NotFoundError: If the invite does not exist
            InvalidInviteTransitionError: If the invite is not pending
        """
        await self.profile_service.require_admin(request.admin_id, "approve invites")
        invite = await self.invite_service.approve_invite(
            request.invite_id, request.admin_id
        )
        try:
            await self.profile_service.record_invite_code(
                invite.used_by, invite.code.root
            )
        except DomainError as e:
            logfire.warn(
                "Could not record invite code on profile",
                invite_id=str(invite.id),
                error=str(e),
            )
        return InviteResponse.from_invite(invite)


class RejectInviteUseCase:
    """Use case for rejecting a pending invite."""

    def __init__(
        self, invite_service: InviteService, profile_service: ProfileService
    ) -> None:
        """Initialize reject invite use case.

        Args:
            invite_service: Invite domain service
            profile_service: Profile domain service (admin check)
        """
        self.invite_service = invite_service
        self.profile_service = profile_service

    async def execute(self, request: ReviewInviteRequest) -> InviteResponse:
        """Reject the invite.

        Raises:
            NotAuthorizedError: If the caller is not an admin
            NotFoundError: If the invite does not exist
            InvalidInviteTransitionError: If the invite is not pending
        """
        await self.profile_service.require_admin(request.admin_id, "reject invites")
        invite = await self.invite_service.reject_invite(request.invite_id)
        return InviteResponse.from_invite(invite)
