"""Domain value objects for SimsKut.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from simskut.domain.value.common import RootValueObject, ValueObject

INVITE_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
INVITE_CODE_PATTERN = re.compile(r"^SIMS-[A-HJ-NP-Z2-9]{4}-[A-HJ-NP-Z2-9]{4}$")

USERNAME_PATTERN = re.compile(r"^(?P<base>[A-Za-z0-9_]{1,32})(?:#(?P<tag>\d{4}))?$")
TAG_PATTERN = re.compile(r"^\d{4}$")


class InviteStatus(str, Enum):
    """Stored status of an invite."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ApprovalStatus(str, Enum):
    """Coarse onboarding status derived from the latest invite."""

    NONE = "none"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class InviteFilter(str, Enum):
    """Admin listing filter."""

    ALL = "all"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationType(str, Enum):
    """Closed set of notification kinds."""

    MENTION_POST = "mention_post"
    MENTION_COMMENT = "mention_comment"
    LIKE_POST = "like_post"
    LIKE_PHOTO = "like_photo"
    LIKE_COMMENT = "like_comment"
    COMMENT_POST = "comment_post"
    COMMENT_PHOTO = "comment_photo"
    REACTION_POST = "reaction_post"
    NEW_POST_FRIEND = "new_post_friend"
    FRIEND_ACCEPT = "friend_accept"
    FAMILY_UPDATE = "family_update"


class FriendshipState(str, Enum):
    """Stored state of a friendship row."""

    PENDING = "pending"
    ACCEPTED = "accepted"


class FriendshipStatus(str, Enum):
    """Friendship as seen from one side."""

    NONE = "none"
    PENDING_SENT = "pending_sent"
    PENDING_RECEIVED = "pending_received"
    ACCEPTED = "accepted"


class OAuthProvider(str, Enum):
    """OAuth providers offered on the login screen."""

    DISCORD = "discord"
    GOOGLE = "google"


class AuthEventType(str, Enum):
    """Events emitted by the auth gateway's session stream."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


class AppRoute(str, Enum):
    """Frontend destinations chosen by the onboarding gate."""

    ADMIN = "/admin"
    FEED = "/feed"
    PENDING = "/pending"
    LOGIN = "/login"


class InviteCode(RootValueObject[str]):
    """Human-shareable invite code, e.g. SIMS-K7PQ-3MZX.

    The alphabet leaves out I, O, 1 and 0 to avoid misreads.
    """

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Validate the exact SIMS-XXXX-XXXX shape."""
        if not INVITE_CODE_PATTERN.match(v):
            raise ValueError("Invite code must match SIMS-XXXX-XXXX")
        return v


class Username(RootValueObject[str]):
    """Unique username, optionally suffixed with a 4-digit tag (base#1234)."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate base charset and optional tag."""
        if not USERNAME_PATTERN.match(v):
            raise ValueError(
                "Username must be 1-32 letters, digits or underscores, "
                "optionally followed by #NNNN"
            )
        return v

    @property
    def base(self) -> str:
        """Username without the tag."""
        return self.root.rsplit("#", 1)[0]

    @property
    def tag(self) -> str | None:
        """The 4-digit tag, if any."""
        match = USERNAME_PATTERN.match(self.root)
        return match.group("tag") if match else None

    def with_tag(self, tag: str) -> "Username":
        """Return the same base with a new tag."""
        return Username(f"{self.base}#{tag}")


class PublicProfile(ValueObject):
    """Public fields of a profile embedded in joined read models."""

    username: str
    display_name: str
    avatar_url: str | None = None


class AuthIdentity(ValueObject):
    """Identity confirmed by the auth gateway.

    metadata carries the provider's raw user metadata (preferred_username,
    user_name, name, full_name, avatar_url, ...).
    """

    user_id: str
    email: str | None = None
    metadata: dict = {}


class AuthSession(ValueObject):
    """Session issued by the auth gateway."""

    access_token: str
    refresh_token: str | None = None
    identity: AuthIdentity


class OAuthRedirect(ValueObject):
    """Start of an OAuth sign-in.

    code_verifier is the PKCE secret the client keeps until the callback.
    """

    url: str
    code_verifier: str | None = None
