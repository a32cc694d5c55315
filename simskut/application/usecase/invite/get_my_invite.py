"""Get my invite use case."""

from datetime import datetime

from pydantic import BaseModel

from simskut.domain.model import Invite
from simskut.domain.service import InviteService
from simskut.domain.service.gate import approval_status
from simskut.domain.value import ApprovalStatus, InviteStatus, UserId


class InviteResponse(BaseModel):
    """Invite as shown to its owner and to admins."""

    id: str
    code: str
    used_by: str
    status: InviteStatus
    approved_by: str | None
    approved_at: datetime | None
    created_at: datetime

    @classmethod
    def from_invite(cls, invite: Invite) -> "InviteResponse":
        """Build from the domain entity."""
        return cls(
            id=str(invite.id),
            code=invite.code.root,
            used_by=str(invite.used_by),
            status=invite.status,
            approved_by=str(invite.approved_by) if invite.approved_by else None,
            approved_at=invite.approved_at,
            created_at=invite.created_at,
        )


class GetMyInviteResponse(BaseModel):
    """The user's current invite and derived status."""

    status: ApprovalStatus
    invite: InviteResponse | None


class GetMyInviteUseCase:
    """Use case for showing a user their current invite."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize get my invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, user_id: UserId) -> GetMyInviteResponse:
        """Return the latest invite, or none."""
        invite = await self.invite_service.get_my_invite(user_id)
        return GetMyInviteResponse(
            status=approval_status(invite),
            invite=InviteResponse.from_invite(invite) if invite else None,
        )
