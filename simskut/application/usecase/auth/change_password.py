"""Change password use case."""

from pydantic import BaseModel

from simskut.domain.error import ValidationError
from simskut.domain.service import AuthService


class ChangePasswordRequest(BaseModel):
    """Change password request."""

    provider_token: str | None
    password: str


class ChangePasswordUseCase:
    """Use case for changing the signed-in user's password."""

    def __init__(self, auth_service: AuthService) -> None:
        """Initialize change password use case.

        Args:
            auth_service: Authentication domain service
        """
        self.auth_service = auth_service

    async def execute(self, request: ChangePasswordRequest) -> None:
        """Change the password.

        Raises:
            ValidationError: If there is no provider session or the password is too short
            AuthGatewayError: If the provider rejects the change
        """
        if not request.provider_token:
            raise ValidationError("Sign in again to change your password")
        await self.auth_service.change_password(request.provider_token, request.password)
