"""Unit tests for the first-login bootstrap use case."""

from uuid import UUID, uuid4

import pytest

from simskut.application.usecase.auth import BootstrapUseCase
from simskut.application.usecase.auth.bootstrap import BootstrapRequest
from simskut.domain.repository import InviteRepository, ProfileRepository
from simskut.domain.value import AppRoute, AuthIdentity, InviteStatus, UserId
from tests.conftest import make_profile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestBootstrap:
    """Tests for BootstrapUseCase."""

    @pytest.mark.asyncio
    async def test_new_user_gets_profile_and_pending_invite(self, unit_env):
        """A first login creates the profile and one pending invite."""
        # Arrange
        use_case = await unit_env.get(BootstrapUseCase)
        identity = AuthIdentity(
            user_id=str(uuid4()),
            email="bella@example.com",
            metadata={"user_name": "bella_goth"},
        )

        # Act
        result = await use_case.execute(BootstrapRequest(identity=identity))

        # Assert
        assert result.profile.username.root == "bella_goth"
        assert result.invite.status == InviteStatus.PENDING
        assert result.route == AppRoute.PENDING

    @pytest.mark.asyncio
    async def test_running_twice_is_idempotent(self, unit_env):
        """A second bootstrap reuses the profile and the invite."""
        # Arrange
        use_case = await unit_env.get(BootstrapUseCase)
        invite_repo = await unit_env.get(InviteRepository)
        identity = AuthIdentity(user_id=str(uuid4()), email="mortimer@example.com")

        # Act
        first = await use_case.execute(BootstrapRequest(identity=identity))
        second = await use_case.execute(BootstrapRequest(identity=identity))

        # Assert
        assert first.profile.id == second.profile.id
        assert first.invite.id == second.invite.id
        user_id = UserId(UUID(identity.user_id))
        assert (await invite_repo.find_latest_for_user(user_id)).id == first.invite.id

    @pytest.mark.asyncio
    async def test_taken_username_gets_a_tag(self, unit_env):
        """A colliding username falls back to base#NNNN."""
        # Arrange
        use_case = await unit_env.get(BootstrapUseCase)
        profile_repo = await unit_env.get(ProfileRepository)
        await profile_repo.create(make_profile("bella"))
        identity = AuthIdentity(user_id=str(uuid4()), email="bella@example.com")

        # Act
        result = await use_case.execute(BootstrapRequest(identity=identity))

        # Assert
        assert result.profile.username.base == "bella"
        assert result.profile.username.tag is not None

    @pytest.mark.asyncio
    async def test_admin_skips_invite(self, unit_env):
        """Admins land on /admin and never receive an invite."""
        # Arrange
        use_case = await unit_env.get(BootstrapUseCase)
        profile_repo = await unit_env.get(ProfileRepository)
        admin = await profile_repo.create(make_profile("chefe", is_admin=True))
        identity = AuthIdentity(user_id=str(admin.id), email="chefe@example.com")

        # Act
        result = await use_case.execute(BootstrapRequest(identity=identity))

        # Assert
        assert result.route == AppRoute.ADMIN
        assert result.invite is None
