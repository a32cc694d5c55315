"""Invite code entity.

Every onboarded user holds an invite that an admin approves or rejects
before the user can reach the feed.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from simskut.domain.model.common import DomainModel, utcnow
from simskut.domain.value import (
    InviteCode,
    InviteId,
    InviteStatus,
    PublicProfile,
    UserId,
)


class Invite(DomainModel):
    """Invite entity.

    Business rules:
    - codes are unique
    - at most one pending invite per user
    - the latest invite by created_at is the user's current one
    - pending moves to approved or rejected by an admin; both are terminal
    """

    id: InviteId
    code: InviteCode
    used_by: UserId
    status: InviteStatus = InviteStatus.PENDING
    approved_by: Optional[UserId] = None
    approved_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)


class InviteListing(DomainModel):
    """Invite joined with its owner's public profile for admin listings."""

    invite: Invite
    owner: Optional[PublicProfile] = None


class InviteStats(DomainModel):
    """Invite counts per status."""

    pending: int = 0
    approved: int = 0
    rejected: int = 0

    @property
    def total(self) -> int:
        """Total number of invites."""
        return self.pending + self.approved + self.rejected
