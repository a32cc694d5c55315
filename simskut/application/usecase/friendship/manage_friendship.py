"""Friend request use cases."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from simskut.domain.model import Friendship
from simskut.domain.service import (
    FriendshipService,
    NotificationService,
    ProfileService,
)
from simskut.domain.service.friendship_service import status_for
from simskut.domain.value import (
    FriendshipId,
    FriendshipStatus,
    NotificationType,
    UserId,
)


class FriendshipResponse(BaseModel):
    """Friendship row as seen by the caller."""

    id: str
    requester_id: str
    addressee_id: str
    status: FriendshipStatus
    created_at: datetime

    @classmethod
    def from_friendship(
        cls, friendship: Friendship, viewer_id: UserId
    ) -> "FriendshipResponse":
        """Build from the domain entity for one viewer."""
        return cls(
            id=str(friendship.id),
            requester_id=str(friendship.requester_id),
            addressee_id=str(friendship.addressee_id),
            status=status_for(friendship, viewer_id),
            created_at=friendship.created_at,
        )


class FriendshipStatusResponse(BaseModel):
    """Status between the caller and another user."""

    status: FriendshipStatus


class GetFriendshipStatusUseCase:
    """Use case for the friendship button."""

    def __init__(self, friendship_service: FriendshipService) -> None:
        """Initialize get status use case.

        Args:
            friendship_service: Friendship domain service
        """
        self.friendship_service = friendship_service

    async def execute(self, viewer_id: UserId, other_id: UserId) -> FriendshipStatusResponse:
        """Status as seen by the viewer."""
        status = await self.friendship_service.get_status(viewer_id, other_id)
        return FriendshipStatusResponse(status=status)


class SendFriendRequestUseCase:
    """Use case for sending a friend request."""

    def __init__(
        self, friendship_service: FriendshipService, profile_service: ProfileService
    ) -> None:
        """Initialize send request use case.

        Args:
            friendship_service: Friendship domain service
            profile_service: Profile domain service
        """
        self.friendship_service = friendship_service
        self.profile_service = profile_service

    async def execute(self, requester_id: UserId, addressee_id: UserId) -> FriendshipResponse:
        """Send the request.

        Raises:
            NotFoundError: If the addressee has no profile
            BusinessRuleViolationError: On self-requests or an existing relation
        """
        await self.profile_service.get_profile(addressee_id)
        friendship = await self.friendship_service.send_request(requester_id, addressee_id)
        return FriendshipResponse.from_friendship(friendship, requester_id)


class AcceptFriendRequestUseCase:
    """Use case for accepting a friend request."""

    def __init__(
        self,
        friendship_service: FriendshipService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize accept request use case.

        Args:
            friendship_service: Friendship domain service
            notification_service: Notification domain service
        """
        self.friendship_service = friendship_service
        self.notification_service = notification_service

    async def execute(self, friendship_id: FriendshipId, user_id: UserId) -> FriendshipResponse:
        """Accept and notify the requester.

        Raises:
            NotFoundError: If there is no such request
            NotAuthorizedError: If the caller is not the addressee
        """
        friendship = await self.friendship_service.accept_request(friendship_id, user_id)
        await self.notification_service.create_interaction_notification(
            recipient_id=friendship.requester_id,
            actor_id=user_id,
            notification_type=NotificationType.FRIEND_ACCEPT,
            reference_id=str(friendship.id),
        )
        logfire.info("Friendship accepted", friendship_id=str(friendship.id))
        return FriendshipResponse.from_friendship(friendship, user_id)


class RemoveFriendshipUseCase:
    """Use case for cancelling, declining or unfriending."""

    def __init__(self, friendship_service: FriendshipService) -> None:
        """Initialize remove use case.

        Args:
            friendship_service: Friendship domain service
        """
        self.friendship_service = friendship_service

    async def execute(self, viewer_id: UserId, other_id: UserId) -> None:
        """Remove whatever relation exists."""
        await self.friendship_service.remove(viewer_id, other_id)
