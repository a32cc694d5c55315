"""Unit tests for mapping errors to HTTP statuses."""

import pytest

from simskut.adapter.error import AuthGatewayError, GalleryProxyError
from simskut.domain.error import (
    BusinessRuleViolationError,
    InvalidInviteTransitionError,
    NotAuthorizedError,
    NotFoundError,
    ProfileAlreadyExistsError,
    ValidationError,
)
from simskut.interface.error import status_for


class TestStatusFor:
    """Tests for status_for."""

    @pytest.mark.parametrize(
        "error,expected",
        [
            (NotFoundError("Post", "1"), 404),
            (NotAuthorizedError("approve invites", "u1"), 403),
            (ProfileAlreadyExistsError("bella"), 409),
            (ValidationError("too long"), 400),
            (BusinessRuleViolationError("once"), 400),
            (InvalidInviteTransitionError("i1", "rejected", "approved"), 400),
            (AuthGatewayError("Invalid login credentials", status_code=400), 400),
            (AuthGatewayError("unreachable"), 502),
            (GalleryProxyError("bad gateway", status_code=500), 502),
            (RuntimeError("bug"), 500),
        ],
    )
    def test_status(self, error, expected):
        """Each error family maps to its status."""
        assert status_for(error) == expected
