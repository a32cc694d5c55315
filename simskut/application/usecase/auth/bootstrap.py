"""First-login bootstrap use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from simskut.domain.error import InviteAlreadyExistsError, ProfileAlreadyExistsError
from simskut.domain.model import Invite, Profile
from simskut.domain.service import InviteService, ProfileService
from simskut.domain.service.profile_service import derive_profile_defaults
from simskut.domain.value import AppRoute, AuthIdentity, UserId

# Extra attempts with a random #tag when the derived username is taken
TAGGED_USERNAME_ATTEMPTS = 3


class BootstrapRequest(BaseModel):
    """Identity to onboard, with optional explicit profile fields."""

    identity: AuthIdentity
    username: str | None = None
    display_name: str | None = None


class BootstrapResponse(BaseModel):
    """Profile and invite after bootstrap, and where to send the user."""

    profile: Profile
    invite: Invite | None
    route: AppRoute


class BootstrapUseCase:
    """Ensure an authenticated identity has a profile and an invite.

    Runs after email registration and after every OAuth sign-in. Running
    it twice for the same identity yields one profile and one invite.
    """

    def __init__(
        self, profile_service: ProfileService, invite_service: InviteService
    ) -> None:
        """Initialize bootstrap use case.

        Args:
            profile_service: Profile domain service
            invite_service: Invite domain service
        """
        self.profile_service = profile_service
        self.invite_service = invite_service

    async def execute(self, request: BootstrapRequest) -> BootstrapResponse:
        """Execute bootstrap flow.

        Steps:
        1. Fetch the profile (failures are logged and treated as missing)
        2. If missing, derive defaults and create it; on conflict re-fetch
        3. Ensure the user holds an invite (admins skip this)
        4. Route admins to /admin and everyone else to /pending

        Args:
            request: Identity and optional explicit username/display name

        Returns:
            Bootstrap result with the landing route
        """
        user_id = UserId(UUID(request.identity.user_id))

        with logfire.span("bootstrap.execute", user_id=str(user_id)):
            profile = await self._fetch_profile(user_id)
            if profile is None:
                profile = await self._create_profile(user_id, request)

            invite = None
            if not profile.is_admin:
                invite = await self._ensure_invite(user_id)

            route = AppRoute.ADMIN if profile.is_admin else AppRoute.PENDING
            logfire.info(
                "User bootstrapped",
                user_id=str(user_id),
                username=profile.username.root,
                route=route.value,
            )
            return BootstrapResponse(profile=profile, invite=invite, route=route)

    async def _fetch_profile(self, user_id: UserId) -> Profile | None:
        try:
            return await self.profile_service.fetch_profile(user_id)
        except Exception as e:
            logfire.warn("Profile fetch failed", user_id=str(user_id), error=str(e))
            return None

    async def _create_profile(
        self, user_id: UserId, request: BootstrapRequest
    ) -> Profile:
        """Create the profile, falling back to a tagged username on collisions.

        Raises:
            ProfileAlreadyExistsError: If every tagged username was taken too
        """
        username, display_name = derive_profile_defaults(request.identity)
        if request.username:
            username = request.username
        if request.display_name:
            display_name = request.display_name

        candidates = [username] + [
            f"{username.split('#')[0]}#{self.profile_service.random_tag()}"
            for _ in range(TAGGED_USERNAME_ATTEMPTS)
        ]
        last_error: ProfileAlreadyExistsError | None = None
        for candidate in candidates:
            try:
                return await self.profile_service.create_profile(
                    user_id, candidate, display_name
                )
            except ProfileAlreadyExistsError as e:
                # A concurrent bootstrap may have created it first
                existing = await self._fetch_profile(user_id)
                if existing is not None:
                    return existing
                logfire.warn(
                    "Username taken, retrying with a tag",
                    user_id=str(user_id),
                    username=candidate,
                )
                last_error = e

        raise last_error or ProfileAlreadyExistsError(username)

    async def _ensure_invite(self, user_id: UserId) -> Invite | None:
        invite = await self.invite_service.get_my_invite(user_id)
        if invite is not None:
            return invite
        try:
            return await self.invite_service.create_invite_for_user(user_id)
        except InviteAlreadyExistsError:
            logfire.info("Invite already exists", user_id=str(user_id))
            return await self.invite_service.get_my_invite(user_id)
