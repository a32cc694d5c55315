"""Unit tests for ProfileService."""

from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from simskut.adapter.supabase.storage import InMemoryStorage
from simskut.domain.error import (
    BusinessRuleViolationError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from simskut.domain.repository import ProfileRepository
from simskut.domain.service import ProfileService, ProfileUpdate
from simskut.domain.service.profile_service import derive_profile_defaults
from simskut.domain.value import AuthIdentity, UserId
from tests.conftest import make_profile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestProfileDefaults:
    """Tests for derive_profile_defaults."""

    def test_preferred_username_is_sanitized(self):
        """Characters outside the username charset are dropped."""
        identity = AuthIdentity(
            user_id=str(uuid4()),
            email="jo@example.com",
            metadata={"preferred_username": "Jo.Silva!", "full_name": "Jo Silva"},
        )

        assert derive_profile_defaults(identity) == ("JoSilva", "Jo Silva")

    def test_falls_back_to_email_local_part(self):
        """Without metadata the email local part is used."""
        identity = AuthIdentity(user_id=str(uuid4()), email="maria.s@example.com")

        assert derive_profile_defaults(identity) == ("marias", "marias")

    def test_falls_back_to_user(self):
        """With nothing usable the username is "user"."""
        identity = AuthIdentity(user_id=str(uuid4()), metadata={"name": "!!!"})

        username, display_name = derive_profile_defaults(identity)

        assert username == "user"
        assert display_name == "!!!"


class TestProfileUpdate:
    """Tests for profile edits."""

    def test_website_must_be_http(self):
        """Websites without an http(s) scheme are rejected."""
        with pytest.raises(PydanticValidationError):
            ProfileUpdate(website_url="ftp://example.com")

    def test_empty_website_clears(self):
        """An empty website clears the field."""
        assert ProfileUpdate(website_url="").website_url is None

    @pytest.mark.asyncio
    async def test_update_only_touches_set_fields(self, unit_env):
        """Unset fields keep their values."""
        # Arrange
        service = await unit_env.get(ProfileService)
        profile_repo = await unit_env.get(ProfileRepository)
        profile = await profile_repo.create(make_profile("simmer", bio="Plumbob fan"))

        # Act
        updated = await service.update_profile(
            profile.id, ProfileUpdate(display_name="Nova Simmer")
        )

        # Assert
        assert updated.display_name == "Nova Simmer"
        assert updated.bio == "Plumbob fan"


class TestChangeUsername:
    """Tests for change_username."""

    @pytest.mark.asyncio
    async def test_base_change_keeps_tag(self, unit_env):
        """Changing only the base keeps the tag and the change allowance."""
        # Arrange
        service = await unit_env.get(ProfileService)
        profile_repo = await unit_env.get(ProfileRepository)
        profile = await profile_repo.create(make_profile("simmer#0042"))

        # Act
        updated = await service.change_username(profile.id, "novo", None)

        # Assert
        assert updated.username.root == "novo#0042"
        assert updated.tag_changed is False

    @pytest.mark.asyncio
    async def test_tag_changes_once(self, unit_env):
        """The first tag change is allowed, the second is not."""
        # Arrange
        service = await unit_env.get(ProfileService)
        profile_repo = await unit_env.get(ProfileRepository)
        profile = await profile_repo.create(make_profile("simmer#0042"))

        # Act
        updated = await service.change_username(profile.id, "simmer", "1234")

        # Assert
        assert updated.username.root == "simmer#1234"
        assert updated.tag_changed is True
        with pytest.raises(BusinessRuleViolationError):
            await service.change_username(profile.id, "simmer", "5678")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("base,tag", [("simmer", "12a"), ("no spaces", None)])
    async def test_malformed_username(self, unit_env, base, tag):
        """Malformed tags and bases fail validation."""
        service = await unit_env.get(ProfileService)
        profile_repo = await unit_env.get(ProfileRepository)
        profile = await profile_repo.create(make_profile("simmer"))

        with pytest.raises(ValidationError):
            await service.change_username(profile.id, base, tag)


class TestUploadImage:
    """Tests for avatar and banner uploads."""

    @pytest.mark.asyncio
    async def test_banner_upload(self, unit_env):
        """Banners go to {id}_banner.jpg with a cache-busting query."""
        # Arrange
        service = await unit_env.get(ProfileService)
        storage = await unit_env.get(InMemoryStorage)
        profile_repo = await unit_env.get(ProfileRepository)
        profile = await profile_repo.create(make_profile("simmer"))

        # Act
        updated = await service.upload_image(
            profile.id, "banner", b"\xff\xd8jpeg", "image/jpeg"
        )

        # Assert
        path = f"{profile.id}_banner.jpg"
        assert storage.objects[path] == (b"\xff\xd8jpeg", "image/jpeg")
        assert updated.banner_url.startswith(
            f"https://storage.mock/object/public/avatars/{path}?t="
        )
        assert updated.avatar_url is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind,data,content_type",
        [
            ("cover", b"x", "image/png"),
            ("avatar", b"x", "text/plain"),
            ("avatar", b"x" * (5 * 1024 * 1024 + 1), "image/png"),
        ],
    )
    async def test_rejected_uploads(self, unit_env, kind, data, content_type):
        """Unknown kinds, non-images and oversized files are rejected."""
        service = await unit_env.get(ProfileService)

        with pytest.raises(ValidationError):
            await service.upload_image(UserId(uuid4()), kind, data, content_type)


class TestProfileLookups:
    """Tests for lookups, admin checks and search."""

    @pytest.mark.asyncio
    async def test_record_invite_code_only_once(self, unit_env):
        """The first recorded code sticks."""
        # Arrange
        service = await unit_env.get(ProfileService)
        profile_repo = await unit_env.get(ProfileRepository)
        profile = await profile_repo.create(make_profile("simmer"))

        # Act
        await service.record_invite_code(profile.id, "AAAA1111")
        result = await service.record_invite_code(profile.id, "BBBB2222")

        # Assert
        assert result.invite_code_used == "AAAA1111"

    @pytest.mark.asyncio
    async def test_require_admin(self, unit_env):
        """Non-admins and unknown users are refused."""
        # Arrange
        service = await unit_env.get(ProfileService)
        profile_repo = await unit_env.get(ProfileRepository)
        admin = await profile_repo.create(make_profile("chefe", is_admin=True))
        member = await profile_repo.create(make_profile("membro"))

        # Act & Assert
        assert (await service.require_admin(admin.id, "list invites")).id == admin.id
        with pytest.raises(NotAuthorizedError):
            await service.require_admin(member.id, "list invites")
        with pytest.raises(NotAuthorizedError):
            await service.require_admin(UserId(uuid4()), "list invites")

    @pytest.mark.asyncio
    async def test_search_strips_at_sign(self, unit_env):
        """Search is a case-insensitive prefix match ignoring a leading @."""
        # Arrange
        service = await unit_env.get(ProfileService)
        profile_repo = await unit_env.get(ProfileRepository)
        await profile_repo.create(make_profile("Bella"))
        await profile_repo.create(make_profile("bellamy"))
        await profile_repo.create(make_profile("mortimer"))

        # Act
        results = await service.search_users("@bel", 6)

        # Assert
        assert sorted(p.username.root for p in results) == ["Bella", "bellamy"]
        assert await service.search_users("@", 6) == []

    @pytest.mark.asyncio
    async def test_get_by_unknown_username(self, unit_env):
        """Unknown usernames raise NotFoundError."""
        service = await unit_env.get(ProfileService)

        with pytest.raises(NotFoundError):
            await service.get_by_username("ninguem")

    def test_random_tag_is_four_digits(self):
        """Random tags are zero-padded to four digits."""
        tag = ProfileService.random_tag()

        assert len(tag) == 4
        assert tag.isdigit()
