"""Integration tests for PostgresInviteRepository.

These tests run against the docker-compose Postgres with migrations applied.
"""

import pytest

from simskut.domain.error import InviteAlreadyExistsError, InviteCodeCollisionError
from simskut.domain.repository import InviteRepository, ProfileRepository
from simskut.domain.value import InviteStatus
from tests.conftest import make_invite, make_profile
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

integration_env = create_env_fixture(unmock={"persistence"})


class TestInviteRepositoryIntegration:
    """Integration tests for invite constraints and queries."""

    @pytest.mark.asyncio
    async def test_second_pending_invite_rejected(self, integration_env):
        """The partial unique index allows one pending invite per user."""
        # Arrange
        profile_repo = await integration_env.get(ProfileRepository)
        invite_repo = await integration_env.get(InviteRepository)
        owner = await profile_repo.create(make_profile("bella"))
        await invite_repo.create(make_invite(owner.id))

        # Act & Assert
        with pytest.raises(InviteAlreadyExistsError):
            await invite_repo.create(make_invite(owner.id))

    @pytest.mark.asyncio
    async def test_new_pending_after_rejection(self, integration_env):
        """A rejected invite does not block a new pending one; the latest wins."""
        # Arrange
        profile_repo = await integration_env.get(ProfileRepository)
        invite_repo = await integration_env.get(InviteRepository)
        owner = await profile_repo.create(make_profile("mortimer"))
        first = await invite_repo.create(make_invite(owner.id))
        await invite_repo.save(first.model_copy(update={"status": InviteStatus.REJECTED}))

        # Act
        second = await invite_repo.create(make_invite(owner.id))
        latest = await invite_repo.find_latest_for_user(owner.id)

        # Assert
        assert latest.id == second.id
        assert latest.status == InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_code_collision(self, integration_env):
        """Reusing a code maps to InviteCodeCollisionError."""
        # Arrange
        profile_repo = await integration_env.get(ProfileRepository)
        invite_repo = await integration_env.get(InviteRepository)
        first_owner = await profile_repo.create(make_profile("nina"))
        second_owner = await profile_repo.create(make_profile("dina"))
        taken = await invite_repo.create(make_invite(first_owner.id))

        # Act & Assert
        with pytest.raises(InviteCodeCollisionError):
            await invite_repo.create(make_invite(second_owner.id, code=taken.code))

    @pytest.mark.asyncio
    async def test_listing_joins_owner(self, integration_env):
        """Listings carry the owner's public profile."""
        # Arrange
        profile_repo = await integration_env.get(ProfileRepository)
        invite_repo = await integration_env.get(InviteRepository)
        owner = await profile_repo.create(make_profile("bob"))
        invite = await invite_repo.create(make_invite(owner.id))

        # Act
        listings = await invite_repo.list_with_owner(InviteStatus.PENDING)

        # Assert
        mine = [entry for entry in listings if entry.invite.id == invite.id]
        assert mine[0].owner.username == "bob"
