"""Unit tests for the onboarding gate and invite codes."""

from uuid import uuid4

import pytest

from simskut.domain.service.gate import approval_status, can_access_feed, resolve_route
from simskut.domain.service.invite_code import (
    generate_invite_code,
    is_valid_invite_format,
)
from simskut.domain.value import AppRoute, ApprovalStatus, InviteCode, InviteStatus, UserId
from tests.conftest import make_invite, make_profile


class TestResolveRoute:
    """Tests for resolve_route and can_access_feed."""

    def test_admin_goes_to_admin_without_invite(self):
        """Admins skip the invite requirement."""
        admin = make_profile("boss", is_admin=True)

        assert can_access_feed(admin, None)
        assert resolve_route(admin, None) == AppRoute.ADMIN

    def test_approved_member_goes_to_feed(self):
        """An approved latest invite opens the feed."""
        profile = make_profile()
        invite = make_invite(profile.id, status=InviteStatus.APPROVED)

        assert can_access_feed(profile, invite)
        assert resolve_route(profile, invite) == AppRoute.FEED

    @pytest.mark.parametrize(
        "status", [None, InviteStatus.PENDING, InviteStatus.REJECTED]
    )
    def test_everyone_else_waits(self, status):
        """Missing, pending and rejected invites all land on /pending."""
        profile = make_profile()
        invite = make_invite(profile.id, status=status) if status else None

        assert not can_access_feed(profile, invite)
        assert resolve_route(profile, invite) == AppRoute.PENDING

    def test_approval_status_mirrors_invite(self):
        """approval_status maps the invite status, or none."""
        user_id = UserId(uuid4())

        assert approval_status(None) == ApprovalStatus.NONE
        assert (
            approval_status(make_invite(user_id, status=InviteStatus.REJECTED))
            == ApprovalStatus.REJECTED
        )


class TestInviteCode:
    """Tests for invite code generation and format."""

    def test_generated_codes_are_valid(self):
        """Generated codes match SIMS-XXXX-XXXX without ambiguous characters."""
        for _ in range(200):
            code = generate_invite_code()
            assert is_valid_invite_format(code)
            assert not set(code[5:]) & set("IO01")

    @pytest.mark.parametrize(
        "code",
        ["SIMS-ABCD-EFG", "sims-ABCD-EFGH", "SIMS-ABCD-EFG0", "SIMS-ABCDEFGH", ""],
    )
    def test_malformed_codes_rejected(self, code):
        """Anything but the exact shape and alphabet is rejected."""
        assert not is_valid_invite_format(code)
        with pytest.raises(ValueError):
            InviteCode(code)
