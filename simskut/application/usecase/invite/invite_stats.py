"""Admin overview statistics use case."""

from pydantic import BaseModel

from simskut.domain.service import FeedService, InviteService, ProfileService
from simskut.domain.value import UserId


class InviteStatsResponse(BaseModel):
    """Counts shown on the admin overview."""

    pending: int
    approved: int
    rejected: int
    total_invites: int
    total_users: int
    total_posts: int


class GetInviteStatsUseCase:
    """Use case for the admin overview counters."""

    def __init__(
        self,
        invite_service: InviteService,
        profile_service: ProfileService,
        feed_service: FeedService,
    ) -> None:
        """Initialize invite stats use case.

        Args:
            invite_service: Invite domain service
            profile_service: Profile domain service
            feed_service: Feed domain service
        """
        self.invite_service = invite_service
        self.profile_service = profile_service
        self.feed_service = feed_service

    async def execute(self, admin_id: UserId) -> InviteStatsResponse:
        """Collect the counters.

        Raises:
            NotAuthorizedError: If the caller is not an admin
        """
        await self.profile_service.require_admin(admin_id, "view invite stats")
        stats = await self.invite_service.get_invite_stats()
        return InviteStatsResponse(
            pending=stats.pending,
            approved=stats.approved,
            rejected=stats.rejected,
            total_invites=stats.total,
            total_users=await self.profile_service.count_profiles(),
            total_posts=await self.feed_service.count_posts(),
        )
