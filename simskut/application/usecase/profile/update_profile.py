"""Profile editing use cases."""

from pydantic import BaseModel, Field

from simskut.application.session import SessionContext
from simskut.domain.service import ProfileService, ProfileUpdate
from simskut.domain.value import UserId

from .get_profile import ProfileResponse


class UpdateProfileUseCase:
    """Use case for editing one's own profile."""

    def __init__(
        self, profile_service: ProfileService, session_context: SessionContext
    ) -> None:
        """Initialize update profile use case.

        Args:
            profile_service: Profile domain service
            session_context: Request session context
        """
        self.profile_service = profile_service
        self.session_context = session_context

    async def execute(self, user_id: UserId, update: ProfileUpdate) -> ProfileResponse:
        """Apply the edit; the session sees the new record.

        Raises:
            NotFoundError: If the user has no profile
        """
        profile = await self.profile_service.update_profile(user_id, update)
        self.session_context.patch_profile(profile)
        return ProfileResponse.from_profile(profile)


class ChangeUsernameRequest(BaseModel):
    """New username base and optional 4-digit tag."""

    user_id: UserId
    base: str = Field(min_length=1, max_length=32)
    tag: str | None = None


class ChangeUsernameUseCase:
    """Use case for changing the username (the tag only once)."""

    def __init__(
        self, profile_service: ProfileService, session_context: SessionContext
    ) -> None:
        """Initialize change username use case.

        Args:
            profile_service: Profile domain service
            session_context: Request session context
        """
        self.profile_service = profile_service
        self.session_context = session_context

    async def execute(self, request: ChangeUsernameRequest) -> ProfileResponse:
        """Change the username.

        Raises:
            ValidationError: If the base or tag is malformed
            BusinessRuleViolationError: If the tag was already changed
            ProfileAlreadyExistsError: If the username is taken
        """
        profile = await self.profile_service.change_username(
            request.user_id, request.base, request.tag
        )
        self.session_context.patch_profile(profile)
        return ProfileResponse.from_profile(profile)


class UploadProfileImageUseCase:
    """Use case for uploading an avatar or banner."""

    def __init__(
        self, profile_service: ProfileService, session_context: SessionContext
    ) -> None:
        """Initialize upload image use case.

        Args:
            profile_service: Profile domain service
            session_context: Request session context
        """
        self.profile_service = profile_service
        self.session_context = session_context

    async def execute(
        self, user_id: UserId, kind: str, data: bytes, content_type: str
    ) -> ProfileResponse:
        """Store the image and point the profile at it.

        Raises:
            ValidationError: If the image is not accepted
            StorageError: If the upload fails
        """
        profile = await self.profile_service.upload_image(
            user_id, kind, data, content_type
        )
        self.session_context.patch_profile(profile)
        return ProfileResponse.from_profile(profile)
