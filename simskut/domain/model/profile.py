"""Profile entity.

One profile per authenticated account; its id is the auth provider's user id.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from simskut.domain.model.common import DomainModel, utcnow
from simskut.domain.value import PublicProfile, UserId, Username


class Profile(DomainModel):
    """Profile entity.

    Business rules:
    - username is unique and may carry a 4-digit tag (base#1234)
    - the tag can be changed exactly once (tag_changed)
    - invite_code_used is set once the owner's invite is approved
    - profiles are never hard-deleted
    """

    id: UserId
    username: Username
    display_name: str
    avatar_url: Optional[str] = None
    banner_url: Optional[str] = None
    bio: Optional[str] = None
    website_url: Optional[str] = None
    is_admin: bool = False
    invite_code_used: Optional[str] = None
    tag_changed: bool = False
    zen_background: Optional[dict[str, Any]] = None
    created_at: datetime = Field(default_factory=utcnow)

    def to_public(self) -> PublicProfile:
        """Public fields embedded in joined read models."""
        return PublicProfile(
            username=self.username.root,
            display_name=self.display_name,
            avatar_url=self.avatar_url,
        )
