"""Get current user use case."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from simskut.application.session import SessionContext
from simskut.domain.service import InviteService, JWTService, ProfileService
from simskut.domain.service.gate import approval_status, resolve_route
from simskut.domain.value import AppRoute, ApprovalStatus, UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """The signed-in user's profile and onboarding state."""

    user_id: str
    username: str
    display_name: str
    avatar_url: str | None
    banner_url: str | None
    bio: str | None
    website_url: str | None
    is_admin: bool
    invite_code_used: str | None
    tag_changed: bool
    zen_background: dict[str, Any] | None
    created_at: datetime
    approval_status: ApprovalStatus
    route: AppRoute


class GetCurrentUserUseCase:
    """Use case for resolving the API token into the current user."""

    def __init__(
        self,
        jwt_service: JWTService,
        profile_service: ProfileService,
        invite_service: InviteService,
        session_context: SessionContext,
    ) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            profile_service: Profile domain service
            invite_service: Invite domain service
            session_context: Request session context, filled on success
        """
        self.jwt_service = jwt_service
        self.profile_service = profile_service
        self.invite_service = invite_service
        self.session_context = session_context

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Steps:
        1. Verify JWT token via JWT service
        2. Load the profile and the latest invite
        3. Fill the request session context
        4. Return the profile with its gate decision

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If the profile does not exist
        """
        payload = self.jwt_service.verify_token(request.token)
        profile = await self.profile_service.get_profile(UserId(UUID(payload.user_id)))
        invite = await self.invite_service.get_my_invite(profile.id)

        self.session_context.set_session(profile.id, profile, payload.provider_token)

        return GetCurrentUserResponse(
            user_id=str(profile.id),
            username=profile.username.root,
            display_name=profile.display_name,
            avatar_url=profile.avatar_url,
            banner_url=profile.banner_url,
            bio=profile.bio,
            website_url=profile.website_url,
            is_admin=profile.is_admin,
            invite_code_used=profile.invite_code_used,
            tag_changed=profile.tag_changed,
            zen_background=profile.zen_background,
            created_at=profile.created_at,
            approval_status=approval_status(invite),
            route=resolve_route(profile, invite),
        )
