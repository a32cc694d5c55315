"""Unit tests for InviteService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from simskut.config import InvitationSettings
from simskut.domain.error import (
    InvalidInviteTransitionError,
    InviteAlreadyExistsError,
    InviteCodeCollisionError,
    NotFoundError,
)
from simskut.domain.repository import InviteRepository, ProfileRepository
from simskut.domain.service import InviteService
from simskut.domain.service.invite_code import is_valid_invite_format
from simskut.domain.value import (
    ApprovalStatus,
    InviteFilter,
    InviteId,
    InviteStatus,
    UserId,
)
from tests.conftest import make_invite, make_profile
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestCreateInviteForUser:
    """Tests for create_invite_for_user."""

    @pytest.mark.asyncio
    async def test_create_invite_success(self, unit_env):
        """A new invite is pending, well-formed and stored."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        user_id = UserId(uuid4())

        # Act
        invite = await invite_service.create_invite_for_user(user_id)

        # Assert
        assert invite.used_by == user_id
        assert invite.status == InviteStatus.PENDING
        assert invite.approved_by is None
        assert is_valid_invite_format(invite.code.root)
        assert await invite_repo.find_by_id(invite.id) == invite

    @pytest.mark.asyncio
    async def test_second_pending_invite_rejected(self, unit_env):
        """A user cannot hold two pending invites."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        user_id = UserId(uuid4())
        await invite_service.create_invite_for_user(user_id)

        # Act & Assert
        with pytest.raises(InviteAlreadyExistsError):
            await invite_service.create_invite_for_user(user_id)

    @pytest.mark.asyncio
    async def test_code_collision_regenerates(self, unit_env, monkeypatch):
        """A colliding code is regenerated instead of failing."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        taken = make_invite(UserId(uuid4()))
        await invite_repo.create(taken)

        codes = iter([taken.code.root, "SIMS-ABCD-EFGH"])
        monkeypatch.setattr(
            "simskut.domain.service.invite_service.generate_invite_code",
            lambda: next(codes),
        )

        # Act
        invite = await invite_service.create_invite_for_user(UserId(uuid4()))

        # Assert
        assert invite.code.root == "SIMS-ABCD-EFGH"

    @pytest.mark.asyncio
    async def test_code_collision_gives_up_after_attempts(self, unit_env, monkeypatch):
        """Every attempt colliding surfaces InviteCodeCollisionError."""
        # Arrange
        invite_repo = await unit_env.get(InviteRepository)
        taken = make_invite(UserId(uuid4()))
        await invite_repo.create(taken)
        invite_service = InviteService(
            invite_repository=invite_repo,
            invitation_settings=InvitationSettings(code_attempts=3),
        )
        monkeypatch.setattr(
            "simskut.domain.service.invite_service.generate_invite_code",
            lambda: taken.code.root,
        )

        # Act & Assert
        with pytest.raises(InviteCodeCollisionError):
            await invite_service.create_invite_for_user(UserId(uuid4()))


class TestCheckInviteStatus:
    """Tests for check_invite_status and get_my_invite."""

    @pytest.mark.asyncio
    async def test_no_invite_is_none(self, unit_env):
        """A user without invites has status none."""
        invite_service = await unit_env.get(InviteService)

        status = await invite_service.check_invite_status(UserId(uuid4()))

        assert status == ApprovalStatus.NONE

    @pytest.mark.asyncio
    async def test_latest_invite_wins(self, unit_env):
        """The newest invite decides the status."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        user_id = UserId(uuid4())
        older = make_invite(user_id, status=InviteStatus.REJECTED)
        newer = make_invite(
            user_id,
            status=InviteStatus.APPROVED,
            created_at=older.created_at + timedelta(minutes=5),
        )
        await invite_repo.create(older)
        await invite_repo.create(newer)

        # Act
        status = await invite_service.check_invite_status(user_id)
        current = await invite_service.get_my_invite(user_id)

        # Assert
        assert status == ApprovalStatus.APPROVED
        assert current.id == newer.id


class TestReviewInvite:
    """Tests for approve_invite and reject_invite."""

    @pytest.mark.asyncio
    async def test_approve_sets_reviewer_and_time(self, unit_env):
        """Approval records who approved and when."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        user_id = UserId(uuid4())
        admin_id = UserId(uuid4())
        invite = await invite_service.create_invite_for_user(user_id)

        # Act
        approved = await invite_service.approve_invite(invite.id, admin_id)

        # Assert
        assert approved.status == InviteStatus.APPROVED
        assert approved.approved_by == admin_id
        assert approved.approved_at is not None
        assert await invite_service.check_invite_status(user_id) == ApprovalStatus.APPROVED

    @pytest.mark.asyncio
    async def test_reject_is_terminal(self, unit_env):
        """A rejected invite cannot be approved afterwards."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        invite = await invite_service.create_invite_for_user(UserId(uuid4()))
        await invite_service.reject_invite(invite.id)

        # Act & Assert
        with pytest.raises(InvalidInviteTransitionError):
            await invite_service.approve_invite(invite.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_approve_twice_fails(self, unit_env):
        """Approved is terminal too."""
        invite_service = await unit_env.get(InviteService)
        invite = await invite_service.create_invite_for_user(UserId(uuid4()))
        await invite_service.approve_invite(invite.id, UserId(uuid4()))

        with pytest.raises(InvalidInviteTransitionError):
            await invite_service.reject_invite(invite.id)

    @pytest.mark.asyncio
    async def test_unknown_invite_not_found(self, unit_env):
        """Reviewing a missing invite raises NotFoundError."""
        invite_service = await unit_env.get(InviteService)

        with pytest.raises(NotFoundError):
            await invite_service.approve_invite(InviteId(uuid4()), UserId(uuid4()))


class TestListInvites:
    """Tests for admin listings and stats."""

    @pytest.mark.asyncio
    async def test_listing_joins_owner_and_filters(self, unit_env):
        """Listings carry the owner's public profile and honor the filter."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        profile_repo = await unit_env.get(ProfileRepository)
        alice = await profile_repo.create(make_profile("alice"))
        bob = await profile_repo.create(make_profile("bob"))
        alice_invite = await invite_service.create_invite_for_user(alice.id)
        await invite_service.create_invite_for_user(bob.id)
        await invite_service.approve_invite(alice_invite.id, UserId(uuid4()))

        # Act
        everything = await invite_service.list_all_invites()
        pending = await invite_service.list_all_invites(InviteFilter.PENDING)

        # Assert
        assert len(everything) == 2
        assert [listing.owner.username for listing in pending] == ["bob"]

    @pytest.mark.asyncio
    async def test_review_queue_is_oldest_first(self, unit_env):
        """Pending invites are reviewed in arrival order."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        first = make_invite(UserId(uuid4()))
        second = make_invite(
            UserId(uuid4()), created_at=first.created_at + timedelta(seconds=30)
        )
        await invite_repo.create(second)
        await invite_repo.create(first)

        # Act
        queue = await invite_service.list_pending_invites()

        # Assert
        assert [listing.invite.id for listing in queue] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_stats_count_each_status(self, unit_env):
        """Stats count pending, approved and rejected invites."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        a = await invite_service.create_invite_for_user(UserId(uuid4()))
        b = await invite_service.create_invite_for_user(UserId(uuid4()))
        await invite_service.create_invite_for_user(UserId(uuid4()))
        await invite_service.approve_invite(a.id, UserId(uuid4()))
        await invite_service.reject_invite(b.id)

        # Act
        stats = await invite_service.get_invite_stats()

        # Assert
        assert (stats.pending, stats.approved, stats.rejected) == (1, 1, 1)
        assert stats.total == 3
