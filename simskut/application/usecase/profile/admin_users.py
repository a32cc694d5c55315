"""Admin user management use cases."""

import logfire
from pydantic import BaseModel, Field

from simskut.domain.error import BusinessRuleViolationError
from simskut.domain.service import ProfileService
from simskut.domain.value import UserId

from .get_profile import ProfileResponse


class ListUsersRequest(BaseModel):
    """Admin user listing request."""

    admin_id: UserId
    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class ListUsersResponse(BaseModel):
    """Page of users and the total."""

    users: list[ProfileResponse]
    total: int


class ListUsersUseCase:
    """Use case for the admin user manager."""

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize list users use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        """List profiles.

        Raises:
            NotAuthorizedError: If the caller is not an admin
        """
        await self.profile_service.require_admin(request.admin_id, "list users")
        profiles = await self.profile_service.list_profiles(
            request.limit, request.offset
        )
        return ListUsersResponse(
            users=[ProfileResponse.from_profile(p) for p in profiles],
            total=await self.profile_service.count_profiles(),
        )


class SetAdminRequest(BaseModel):
    """Grant or revoke admin."""

    admin_id: UserId
    user_id: UserId
    is_admin: bool


class SetAdminUseCase:
    """Use case for toggling another user's admin flag."""

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize set admin use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: SetAdminRequest) -> ProfileResponse:
        """Set the flag.

        Raises:
            NotAuthorizedError: If the caller is not an admin
            BusinessRuleViolationError: If an admin tries to demote themselves
            NotFoundError: If the target has no profile
        """
        await self.profile_service.require_admin(request.admin_id, "manage admins")
        if request.admin_id == request.user_id and not request.is_admin:
            raise BusinessRuleViolationError("Admins cannot revoke their own access")
        profile = await self.profile_service.set_admin(request.user_id, request.is_admin)
        logfire.info(
            "Admin flag changed",
            user_id=str(request.user_id),
            is_admin=request.is_admin,
            by=str(request.admin_id),
        )
        return ProfileResponse.from_profile(profile)
