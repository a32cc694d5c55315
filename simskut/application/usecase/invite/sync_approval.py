"""Approval re-check use case for the pending screen."""

import logfire
from pydantic import BaseModel

from simskut.domain.service import InviteService, ProfileService
from simskut.domain.service.gate import approval_status, resolve_route
from simskut.domain.value import AppRoute, ApprovalStatus, UserId


class SyncApprovalResponse(BaseModel):
    """Current approval status and the route it implies."""

    status: ApprovalStatus
    route: AppRoute


class SyncApprovalUseCase:
    """Use case polled by the pending screen.

    Once the invite is approved, the approved code is copied onto the
    profile if it is still empty.
    """

    def __init__(
        self, invite_service: InviteService, profile_service: ProfileService
    ) -> None:
        """Initialize sync approval use case.

        Args:
            invite_service: Invite domain service
            profile_service: Profile domain service
        """
        self.invite_service = invite_service
        self.profile_service = profile_service

    async def execute(self, user_id: UserId) -> SyncApprovalResponse:
        """Re-check the invite and reconcile the profile.

        Raises:
            NotFoundError: If the user has no profile
        """
        with logfire.span("sync_approval.execute", user_id=str(user_id)):
            profile = await self.profile_service.get_profile(user_id)
            invite = await self.invite_service.get_my_invite(user_id)
            status = approval_status(invite)

            if (
                status == ApprovalStatus.APPROVED
                and invite is not None
                and not profile.invite_code_used
            ):
                profile = await self.profile_service.record_invite_code(
                    user_id, invite.code.root
                )

            return SyncApprovalResponse(
                status=status, route=resolve_route(profile, invite)
            )
