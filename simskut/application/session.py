"""Per-request session context.

Holds who is signed in for the current request. Writes go through
SessionContext only; everything else reads the frozen SessionView.
"""

from typing import Optional

import logfire

from simskut.domain.model import Profile
from simskut.domain.value import UserId
from simskut.domain.value.common import ValueObject


class SessionView(ValueObject):
    """Immutable snapshot of the session."""

    user_id: Optional[UserId] = None
    profile: Optional[Profile] = None
    provider_token: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        """Whether a user is signed in."""
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        """Whether the signed-in user is an admin."""
        return self.profile is not None and self.profile.is_admin


class SessionContext:
    """Single writer for the request's session."""

    def __init__(self) -> None:
        self._view = SessionView()

    @property
    def view(self) -> SessionView:
        """Current snapshot."""
        return self._view

    def set_session(
        self,
        user_id: UserId,
        profile: Profile | None,
        provider_token: str | None = None,
    ) -> SessionView:
        """Replace the session with a signed-in user."""
        self._view = SessionView(
            user_id=user_id, profile=profile, provider_token=provider_token
        )
        return self._view

    def patch_profile(self, profile: Profile) -> SessionView:
        """Swap in a newer profile record for the signed-in user.

        The whole record is replaced; profiles of other users are ignored.
        """
        if self._view.user_id != profile.id:
            logfire.warn(
                "Ignored profile patch for another user",
                session_user=str(self._view.user_id),
                profile_user=str(profile.id),
            )
            return self._view
        self._view = self._view.model_copy(update={"profile": profile})
        return self._view

    def clear(self) -> SessionView:
        """Sign the request out."""
        self._view = SessionView()
        return self._view
