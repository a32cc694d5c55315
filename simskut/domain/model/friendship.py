"""Friendship entity."""

from datetime import datetime

from pydantic import Field

from simskut.domain.model.common import DomainModel, utcnow
from simskut.domain.value import FriendshipId, FriendshipState, UserId


class Friendship(DomainModel):
    """Friend request from requester to addressee.

    A pending row is one-directional; an accepted row is symmetric.
    """

    id: FriendshipId
    requester_id: UserId
    addressee_id: UserId
    status: FriendshipState = FriendshipState.PENDING
    created_at: datetime = Field(default_factory=utcnow)

    def involves(self, user_id: UserId) -> bool:
        """Whether the user is on either side."""
        return user_id in (self.requester_id, self.addressee_id)

    def other(self, user_id: UserId) -> UserId:
        """The party that is not `user_id`."""
        return self.addressee_id if user_id == self.requester_id else self.requester_id
