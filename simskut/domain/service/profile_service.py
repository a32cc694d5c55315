"""Profile domain service."""

import re
import secrets
import time
from typing import Any

import logfire
from pydantic import BaseModel, Field, field_validator

from simskut.domain.error import (
    BusinessRuleViolationError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from simskut.domain.model import Profile
from simskut.domain.model.common import utcnow
from simskut.domain.repository import ProfileRepository
from simskut.domain.value import AuthIdentity, PublicProfile, UserId, Username
from simskut.domain.value.types import TAG_PATTERN

from .base import Service
from .storage import ObjectStorage

USERNAME_FALLBACK = "user"
MAX_IMAGE_BYTES = 5 * 1024 * 1024
WEBSITE_PATTERN = re.compile(r"^https?://.+")


def _sanitize_username(candidate: str | None) -> str:
    if not candidate:
        return ""
    return re.sub(r"[^A-Za-z0-9_]", "", candidate)[:32]


def derive_profile_defaults(identity: AuthIdentity) -> tuple[str, str]:
    """Default username and display name for a first login.

    Username order: preferred_username, user_name, name, email local part,
    then "user". Display name order: full_name, name, username.

    Args:
        identity: Identity confirmed by the auth gateway

    Returns:
        Tuple of (username, display_name)
    """
    meta = identity.metadata or {}
    email_local = identity.email.split("@")[0] if identity.email else None

    username = USERNAME_FALLBACK
    for candidate in (
        meta.get("preferred_username"),
        meta.get("user_name"),
        meta.get("name"),
        email_local,
    ):
        cleaned = _sanitize_username(candidate)
        if cleaned:
            username = cleaned
            break

    display_name = meta.get("full_name") or meta.get("name") or username
    return username, display_name[:50]


class ProfileUpdate(BaseModel):
    """Editable profile fields. Unset fields are left untouched."""

    display_name: str | None = Field(default=None, min_length=1, max_length=50)
    bio: str | None = Field(default=None, max_length=160)
    website_url: str | None = Field(default=None, max_length=100)
    avatar_url: str | None = None
    banner_url: str | None = None
    zen_background: dict[str, Any] | None = None

    @field_validator("website_url")
    @classmethod
    def validate_website(cls, v: str | None) -> str | None:
        """Require an http(s) URL; empty string clears the field."""
        if not v:
            return None
        if not WEBSITE_PATTERN.match(v):
            raise ValueError("Website must start with http:// or https://")
        return v


class ProfileService(Service):
    """Domain service for profile operations."""

    def __init__(
        self, profile_repository: ProfileRepository, storage: ObjectStorage
    ) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
            storage: Object storage for avatar and banner images
        """
        self.profile_repository = profile_repository
        self.storage = storage

    async def fetch_profile(self, user_id: UserId) -> Profile | None:
        """Get a profile, or None if the user has none yet."""
        with logfire.span("profile_service.fetch_profile", user_id=str(user_id)):
            return await self.profile_repository.find_by_id(user_id)

    async def get_profile(self, user_id: UserId) -> Profile:
        """Get a profile that must exist.

        Raises:
            NotFoundError: If no profile exists for the user
        """
        profile = await self.fetch_profile(user_id)
        if profile is None:
            raise NotFoundError("Profile", str(user_id))
        return profile

    async def get_by_username(self, username: str) -> Profile:
        """Get a profile by full username.

        Raises:
            NotFoundError: If no profile has this username
        """
        with logfire.span("profile_service.get_by_username", username=username):
            profile = await self.profile_repository.find_by_username(username)
            if profile is None:
                raise NotFoundError("Profile", username)
            return profile

    async def create_profile(
        self, user_id: UserId, username: str, display_name: str
    ) -> Profile:
        """Create the profile for a newly authenticated user.

        Args:
            user_id: Auth identity id
            username: Initial username
            display_name: Initial display name

        Returns:
            Created profile

        Raises:
            ProfileAlreadyExistsError: If the id or username is taken
        """
        with logfire.span(
            "profile_service.create_profile", user_id=str(user_id), username=username
        ):
            profile = Profile(
                id=user_id,
                username=Username(username),
                display_name=display_name,
                created_at=utcnow(),
            )
            created = await self.profile_repository.create(profile)
            logfire.info("Profile created", user_id=str(user_id), username=username)
            return created

    async def update_profile(self, user_id: UserId, update: ProfileUpdate) -> Profile:
        """Apply an edit to the user's profile. Last write wins.

        Args:
            user_id: Profile owner
            update: Fields to change

        Returns:
            Updated profile
        """
        with logfire.span("profile_service.update_profile", user_id=str(user_id)):
            profile = await self.get_profile(user_id)
            changes = update.model_dump(exclude_unset=True)
            updated = profile.model_copy(update=changes)
            saved = await self.profile_repository.save(updated)
            logfire.info(
                "Profile updated", user_id=str(user_id), fields=sorted(changes)
            )
            return saved

    async def change_username(
        self, user_id: UserId, base: str, tag: str | None
    ) -> Profile:
        """Change the username base and, once, its tag.

        Args:
            user_id: Profile owner
            base: New username base
            tag: Requested 4-digit tag, or None to keep the current one

        Returns:
            Updated profile

        Raises:
            ValidationError: If the base or tag is malformed
            BusinessRuleViolationError: If the tag was already changed once
            ProfileAlreadyExistsError: If the resulting username is taken
        """
        with logfire.span(
            "profile_service.change_username", user_id=str(user_id), base=base
        ):
            profile = await self.get_profile(user_id)
            current_tag = profile.username.tag
            tag_changes = tag is not None and tag != current_tag

            if tag is not None and not TAG_PATTERN.match(tag):
                raise ValidationError("Tag must be exactly 4 digits")
            if tag_changes and profile.tag_changed:
                raise BusinessRuleViolationError("Tag can only be changed once")

            new_tag = tag if tag is not None else current_tag
            raw = f"{base}#{new_tag}" if new_tag else base
            try:
                username = Username(raw)
            except ValueError as e:
                raise ValidationError(str(e))

            updates: dict[str, Any] = {"username": username}
            if tag_changes:
                updates["tag_changed"] = True

            saved = await self.profile_repository.save(profile.model_copy(update=updates))
            logfire.info(
                "Username changed",
                user_id=str(user_id),
                username=username.root,
                tag_changed=tag_changes,
            )
            return saved

    async def upload_image(
        self, user_id: UserId, kind: str, data: bytes, content_type: str
    ) -> Profile:
        """Upload an avatar or banner and point the profile at it.

        Args:
            user_id: Profile owner
            kind: "avatar" or "banner"
            data: Image bytes (already cropped by the client)
            content_type: Image MIME type

        Returns:
            Updated profile

        Raises:
            ValidationError: If the kind, type or size is not accepted
        """
        if kind not in ("avatar", "banner"):
            raise ValidationError(f"Unknown image kind: {kind}")
        if not content_type.startswith("image/"):
            raise ValidationError("Only images can be uploaded")
        if len(data) > MAX_IMAGE_BYTES:
            raise ValidationError("Image must be at most 5 MB")

        with logfire.span(
            "profile_service.upload_image", user_id=str(user_id), kind=kind
        ):
            profile = await self.get_profile(user_id)
            suffix = "" if kind == "avatar" else "_banner"
            path = await self.storage.upload(
                f"{user_id}{suffix}.jpg", data, content_type, upsert=True
            )
            # Same path on every upload, so bust caches with a timestamp
            url = f"{self.storage.public_url(path)}?t={int(time.time() * 1000)}"
            saved = await self.profile_repository.save(
                profile.model_copy(update={f"{kind}_url": url})
            )
            logfire.info("Profile image uploaded", user_id=str(user_id), kind=kind)
            return saved

    async def record_invite_code(self, user_id: UserId, code: str) -> Profile:
        """Store the approved invite code on the profile if it is still empty.

        Read-then-conditionally-write, so repeated calls are harmless.

        Args:
            user_id: Profile owner
            code: Approved invite code

        Returns:
            The profile after reconciliation
        """
        with logfire.span(
            "profile_service.record_invite_code", user_id=str(user_id)
        ):
            profile = await self.get_profile(user_id)
            if profile.invite_code_used:
                return profile
            saved = await self.profile_repository.save(
                profile.model_copy(update={"invite_code_used": code})
            )
            logfire.info("Invite code recorded on profile", user_id=str(user_id))
            return saved

    async def require_admin(self, user_id: UserId, action: str) -> Profile:
        """Get the caller's profile, failing unless it is an admin.

        Raises:
            NotAuthorizedError: If the caller is missing or not an admin
        """
        profile = await self.profile_repository.find_by_id(user_id)
        if profile is None or not profile.is_admin:
            logfire.warn("Admin action denied", user_id=str(user_id), action=action)
            raise NotAuthorizedError(action, str(user_id))
        return profile

    async def search_users(self, prefix: str, limit: int) -> list[Profile]:
        """Username prefix search for mention autocomplete."""
        prefix = prefix.lstrip("@")
        if not prefix:
            return []
        with logfire.span("profile_service.search_users", prefix=prefix):
            return await self.profile_repository.search_by_username_prefix(
                prefix, limit
            )

    async def public_profiles(self, user_ids: list[UserId]) -> dict[UserId, PublicProfile]:
        """Public fields for several users, keyed by id."""
        if not user_ids:
            return {}
        return await self.profile_repository.find_public_profiles(user_ids)

    async def list_profiles(self, limit: int = 100, offset: int = 0) -> list[Profile]:
        """List profiles for the admin user manager."""
        with logfire.span("profile_service.list_profiles", limit=limit, offset=offset):
            return await self.profile_repository.list_all(limit, offset)

    async def count_profiles(self) -> int:
        """Total number of profiles."""
        return await self.profile_repository.count()

    async def set_admin(self, user_id: UserId, is_admin: bool) -> Profile:
        """Grant or revoke the admin flag."""
        with logfire.span(
            "profile_service.set_admin", user_id=str(user_id), is_admin=is_admin
        ):
            profile = await self.get_profile(user_id)
            return await self.profile_repository.save(
                profile.model_copy(update={"is_admin": is_admin})
            )

    @staticmethod
    def random_tag() -> str:
        """Random 4-digit tag used to disambiguate colliding usernames."""
        return f"{secrets.randbelow(10000):04d}"
