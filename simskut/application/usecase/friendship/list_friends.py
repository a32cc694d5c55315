"""Friend listing use case."""

from pydantic import BaseModel

from simskut.domain.service import FriendshipService, ProfileService
from simskut.domain.value import PublicProfile, UserId


class FriendSummary(BaseModel):
    """A friend or requester with their public profile."""

    user_id: str
    profile: PublicProfile | None
    friendship_id: str | None = None


class ListFriendsResponse(BaseModel):
    """Accepted friends and incoming requests."""

    friends: list[FriendSummary]
    incoming: list[FriendSummary]


class ListFriendsUseCase:
    """Use case for the friends modal."""

    def __init__(
        self, friendship_service: FriendshipService, profile_service: ProfileService
    ) -> None:
        """Initialize list friends use case.

        Args:
            friendship_service: Friendship domain service
            profile_service: Profile domain service
        """
        self.friendship_service = friendship_service
        self.profile_service = profile_service

    async def execute(self, user_id: UserId) -> ListFriendsResponse:
        """List friends and pending requests addressed to the user."""
        friend_ids = await self.friendship_service.list_friends(user_id)
        incoming = await self.friendship_service.list_incoming(user_id)
        profiles = await self.profile_service.public_profiles(
            friend_ids + [f.requester_id for f in incoming]
        )
        return ListFriendsResponse(
            friends=[
                FriendSummary(user_id=str(fid), profile=profiles.get(fid))
                for fid in friend_ids
            ],
            incoming=[
                FriendSummary(
                    user_id=str(f.requester_id),
                    profile=profiles.get(f.requester_id),
                    friendship_id=str(f.id),
                )
                for f in incoming
            ],
        )
