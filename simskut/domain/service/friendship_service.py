"""Friendship domain service."""

import logfire
from uuid import uuid4

from simskut.domain.error import (
    BusinessRuleViolationError,
    NotAuthorizedError,
    NotFoundError,
)
from simskut.domain.model import Friendship
from simskut.domain.model.common import utcnow
from simskut.domain.repository import FriendshipRepository
from simskut.domain.value import (
    FriendshipId,
    FriendshipState,
    FriendshipStatus,
    UserId,
)

from .base import Service


def status_for(friendship: Friendship | None, viewer_id: UserId) -> FriendshipStatus:
    """Friendship status as seen by `viewer_id`."""
    if friendship is None:
        return FriendshipStatus.NONE
    if friendship.status == FriendshipState.ACCEPTED:
        return FriendshipStatus.ACCEPTED
    if friendship.requester_id == viewer_id:
        return FriendshipStatus.PENDING_SENT
    return FriendshipStatus.PENDING_RECEIVED


class FriendshipService(Service):
    """Domain service for friend requests."""

    def __init__(self, friendship_repository: FriendshipRepository) -> None:
        """Initialize friendship service.

        Args:
            friendship_repository: Friendship repository
        """
        self.friendship_repository = friendship_repository

    async def get_status(self, viewer_id: UserId, other_id: UserId) -> FriendshipStatus:
        """Friendship status between the viewer and another user."""
        friendship = await self.friendship_repository.find_between(viewer_id, other_id)
        return status_for(friendship, viewer_id)

    async def send_request(self, requester_id: UserId, addressee_id: UserId) -> Friendship:
        """Send a friend request.

        Raises:
            BusinessRuleViolationError: On self-requests or an existing relation
        """
        if requester_id == addressee_id:
            raise BusinessRuleViolationError("Cannot send a friend request to yourself")

        with logfire.span(
            "friendship_service.send_request",
            requester_id=str(requester_id),
            addressee_id=str(addressee_id),
        ):
            existing = await self.friendship_repository.find_between(
                requester_id, addressee_id
            )
            if existing is not None:
                raise BusinessRuleViolationError(
                    f"Friendship already {status_for(existing, requester_id).value}"
                )
            friendship = Friendship(
                id=FriendshipId(uuid4()),
                requester_id=requester_id,
                addressee_id=addressee_id,
                status=FriendshipState.PENDING,
                created_at=utcnow(),
            )
            saved = await self.friendship_repository.create(friendship)
            logfire.info("Friend request sent", friendship_id=str(saved.id))
            return saved

    async def accept_request(self, friendship_id: FriendshipId, user_id: UserId) -> Friendship:
        """Accept a pending request addressed to `user_id`.

        Raises:
            NotFoundError: If there is no such pending request
            NotAuthorizedError: If the caller is not the addressee
        """
        with logfire.span(
            "friendship_service.accept_request", friendship_id=str(friendship_id)
        ):
            friendship = await self.friendship_repository.find_by_id(friendship_id)
            if friendship is None:
                raise NotFoundError("Friend request", str(friendship_id))
            if friendship.addressee_id != user_id:
                raise NotAuthorizedError(
                    f"accept friend request {friendship_id}", str(user_id)
                )
            if friendship.status == FriendshipState.ACCEPTED:
                return friendship
            accepted = await self.friendship_repository.save(
                friendship.model_copy(update={"status": FriendshipState.ACCEPTED})
            )
            logfire.info("Friend request accepted", friendship_id=str(friendship_id))
            return accepted

    async def remove(self, viewer_id: UserId, other_id: UserId) -> None:
        """Cancel, decline or unfriend, whatever the current state."""
        with logfire.span(
            "friendship_service.remove",
            viewer_id=str(viewer_id),
            other_id=str(other_id),
        ):
            friendship = await self.friendship_repository.find_between(viewer_id, other_id)
            if friendship is None:
                return
            await self.friendship_repository.delete(friendship.id)
            logfire.info("Friendship removed", friendship_id=str(friendship.id))

    async def list_friends(self, user_id: UserId) -> list[UserId]:
        """Ids of the user's accepted friends."""
        friendships = await self.friendship_repository.list_accepted(user_id)
        return [f.other(user_id) for f in friendships]

    async def list_incoming(self, user_id: UserId) -> list[Friendship]:
        """Pending requests addressed to the user."""
        return await self.friendship_repository.list_incoming(user_id)
