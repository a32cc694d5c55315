"""Invite domain service."""

import logfire
from uuid import uuid4

from simskut.config import InvitationSettings
from simskut.domain.error import (
    InvalidInviteTransitionError,
    InviteCodeCollisionError,
    NotFoundError,
)
from simskut.domain.model import Invite, InviteListing, InviteStats
from simskut.domain.model.common import utcnow
from simskut.domain.repository import InviteRepository
from simskut.domain.value import (
    ApprovalStatus,
    InviteCode,
    InviteFilter,
    InviteId,
    InviteStatus,
    UserId,
)

from .base import Service
from .gate import approval_status
from .invite_code import generate_invite_code


class InviteService(Service):
    """Domain service for the invite approval lifecycle.

    States: none -> pending -> approved | rejected. Approved and rejected
    are terminal.
    """

    def __init__(
        self,
        invite_repository: InviteRepository,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            invitation_settings: Invitation settings
        """
        self.invite_repository = invite_repository
        self.invitation_settings = invitation_settings

    async def create_invite_for_user(self, user_id: UserId) -> Invite:
        """Create the user's pending invite with a fresh code.

        Codes are regenerated when they collide with an existing one.

        Args:
            user_id: Owner of the invite

        Returns:
            Created invite

        Raises:
            InviteAlreadyExistsError: If the user already holds a pending invite
            InviteCodeCollisionError: If every generated code collided
        """
        with logfire.span(
            "invite_service.create_invite_for_user", user_id=str(user_id)
        ):
            attempts = self.invitation_settings.code_attempts
            for attempt in range(1, attempts + 1):
                invite = Invite(
                    id=InviteId(uuid4()),
                    code=InviteCode(generate_invite_code()),
                    used_by=user_id,
                    status=InviteStatus.PENDING,
                    created_at=utcnow(),
                )
                try:
                    saved = await self.invite_repository.create(invite)
                except InviteCodeCollisionError:
                    logfire.warn(
                        "Invite code collision, regenerating",
                        user_id=str(user_id),
                        attempt=attempt,
                    )
                    continue

                logfire.info(
                    "Invite created",
                    invite_id=str(saved.id),
                    user_id=str(user_id),
                )
                return saved

            raise InviteCodeCollisionError(
                f"Could not generate a unique invite code after {attempts} attempts"
            )

    async def get_my_invite(self, user_id: UserId) -> Invite | None:
        """Get the user's current (latest) invite.

        Args:
            user_id: Owner of the invite

        Returns:
            The latest invite, or None if the user has none
        """
        with logfire.span("invite_service.get_my_invite", user_id=str(user_id)):
            return await self.invite_repository.find_latest_for_user(user_id)

    async def check_invite_status(self, user_id: UserId) -> ApprovalStatus:
        """Derive the user's onboarding status from the latest invite.

        Args:
            user_id: Owner of the invite

        Returns:
            none, pending, approved or rejected
        """
        with logfire.span(
            "invite_service.check_invite_status", user_id=str(user_id)
        ):
            invite = await self.invite_repository.find_latest_for_user(user_id)
            status = approval_status(invite)
            logfire.info(
                "Invite status checked", user_id=str(user_id), status=status.value
            )
            return status

    async def approve_invite(self, invite_id: InviteId, admin_id: UserId) -> Invite:
        """Approve a pending invite.

        Args:
            invite_id: Invite to approve
            admin_id: Admin performing the approval

        Returns:
            Approved invite

        Raises:
            NotFoundError: If the invite does not exist
            InvalidInviteTransitionError: If the invite is not pending
        """
        with logfire.span(
            "invite_service.approve_invite",
            invite_id=str(invite_id),
            admin_id=str(admin_id),
        ):
            invite = await self._get_pending(invite_id, InviteStatus.APPROVED)
            approved = invite.model_copy(
                update={
                    "status": InviteStatus.APPROVED,
                    "approved_by": admin_id,
                    "approved_at": utcnow(),
                }
            )
            saved = await self.invite_repository.save(approved)
            logfire.info(
                "Invite approved",
                invite_id=str(invite_id),
                user_id=str(invite.used_by),
            )
            return saved

    async def reject_invite(self, invite_id: InviteId) -> Invite:
        """Reject a pending invite.

        Args:
            invite_id: Invite to reject

        Returns:
            Rejected invite

        Raises:
            NotFoundError: If the invite does not exist
            InvalidInviteTransitionError: If the invite is not pending
        """
        with logfire.span("invite_service.reject_invite", invite_id=str(invite_id)):
            invite = await self._get_pending(invite_id, InviteStatus.REJECTED)
            rejected = invite.model_copy(update={"status": InviteStatus.REJECTED})
            saved = await self.invite_repository.save(rejected)
            logfire.info(
                "Invite rejected",
                invite_id=str(invite_id),
                user_id=str(invite.used_by),
            )
            return saved

    async def _get_pending(self, invite_id: InviteId, target: InviteStatus) -> Invite:
        invite = await self.invite_repository.find_by_id(invite_id)
        if invite is None:
            logfire.warn("Invite not found", invite_id=str(invite_id))
            raise NotFoundError("Invite", str(invite_id))
        if invite.status != InviteStatus.PENDING:
            logfire.warn(
                "Invalid invite transition",
                invite_id=str(invite_id),
                current=invite.status.value,
                target=target.value,
            )
            raise InvalidInviteTransitionError(
                str(invite_id), invite.status.value, target.value
            )
        return invite

    async def list_all_invites(
        self, invite_filter: InviteFilter = InviteFilter.ALL
    ) -> list[InviteListing]:
        """Admin listing joined with owner profiles, newest first.

        Args:
            invite_filter: Status filter; ALL disables filtering

        Returns:
            List of invite listings
        """
        with logfire.span(
            "invite_service.list_all_invites", filter=invite_filter.value
        ):
            status = (
                None
                if invite_filter == InviteFilter.ALL
                else InviteStatus(invite_filter.value)
            )
            listings = await self.invite_repository.list_with_owner(
                status=status, newest_first=True
            )
            logfire.info("Invites listed", count=len(listings))
            return listings

    async def list_pending_invites(self) -> list[InviteListing]:
        """Pending invites, oldest first (review queue order)."""
        with logfire.span("invite_service.list_pending_invites"):
            return await self.invite_repository.list_with_owner(
                status=InviteStatus.PENDING, newest_first=False
            )

    async def get_invite_stats(self) -> InviteStats:
        """Invite counts per status."""
        with logfire.span("invite_service.get_invite_stats"):
            return await self.invite_repository.count_by_status()
