"""Unit tests for the per-request session context."""

from uuid import uuid4

from simskut.application.session import SessionContext
from tests.conftest import make_profile


class TestSessionContext:
    """Tests for SessionContext."""

    def test_starts_signed_out(self):
        """A fresh context is unauthenticated."""
        context = SessionContext()

        assert context.view.authenticated is False
        assert context.view.is_admin is False

    def test_set_and_clear(self):
        """Setting a session exposes the user; clearing removes it."""
        # Arrange
        context = SessionContext()
        profile = make_profile("chefe", is_admin=True)

        # Act
        view = context.set_session(profile.id, profile, "provider-token")

        # Assert
        assert view.authenticated is True
        assert view.is_admin is True
        assert view.provider_token == "provider-token"
        assert context.clear().authenticated is False

    def test_patch_profile_replaces_record(self):
        """A newer profile record of the same user replaces the old one."""
        context = SessionContext()
        profile = make_profile("bella")
        context.set_session(profile.id, profile)

        view = context.patch_profile(profile.model_copy(update={"bio": "nova bio"}))

        assert view.profile.bio == "nova bio"

    def test_patch_for_other_user_ignored(self):
        """Profiles of other users never enter the session."""
        context = SessionContext()
        profile = make_profile("bella")
        context.set_session(profile.id, profile)
        stranger = make_profile("mortimer", id=uuid4())

        view = context.patch_profile(stranger)

        assert view.profile.id == profile.id
