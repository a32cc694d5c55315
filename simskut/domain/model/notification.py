"""Notification entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from simskut.domain.model.common import DomainModel, utcnow
from simskut.domain.value import NotificationId, NotificationType, PublicProfile, UserId


class Notification(DomainModel):
    """Interaction feedback directed at a recipient.

    Only `read` is ever mutated after creation.
    """

    id: NotificationId
    user_id: UserId  # Recipient
    actor_id: Optional[UserId] = None
    type: NotificationType
    content: Optional[str] = None  # Preview text
    reference_id: Optional[str] = None  # Source post/comment/photo id
    read: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class NotificationView(DomainModel):
    """Notification joined with the actor's public profile."""

    notification: Notification
    actor: Optional[PublicProfile] = None
