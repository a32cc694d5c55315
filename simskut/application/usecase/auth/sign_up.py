"""Email registration use case."""

import logfire
from pydantic import BaseModel, Field

from simskut.application.session import SessionContext
from simskut.domain.service import AuthService, JWTService
from simskut.domain.value import AppRoute

from .bootstrap import BootstrapRequest, BootstrapUseCase


class SignUpRequest(BaseModel):
    """Registration form."""

    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=8)
    username: str = Field(min_length=1, max_length=32, pattern=r"^[A-Za-z0-9_]+$")
    display_name: str = Field(min_length=1, max_length=50)


class SignUpResponse(BaseModel):
    """Registration result."""

    token: str
    user_id: str
    username: str
    route: AppRoute


class SignUpUseCase:
    """Use case for registering with email and password."""

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        bootstrap_use_case: BootstrapUseCase,
        session_context: SessionContext,
    ) -> None:
        """Initialize sign-up use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: JWT token domain service
            bootstrap_use_case: First-login bootstrap
            session_context: Request session context
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.bootstrap_use_case = bootstrap_use_case
        self.session_context = session_context

    async def execute(self, request: SignUpRequest) -> SignUpResponse:
        """Create the account, then its profile and pending invite.

        Raises:
            AuthGatewayError: If the provider rejects the registration
            ProfileAlreadyExistsError: If no free username could be found
        """
        with logfire.span("sign_up.execute"):
            identity = await self.auth_service.sign_up_with_email(
                request.email, request.password
            )
            result = await self.bootstrap_use_case.execute(
                BootstrapRequest(
                    identity=identity,
                    username=request.username,
                    display_name=request.display_name,
                )
            )
            session = self.auth_service.auth_gateway.current_session
            provider_token = session.access_token if session else None
            self.session_context.set_session(
                result.profile.id, result.profile, provider_token
            )
            token = self.jwt_service.create_token(
                user_id=str(result.profile.id),
                username=result.profile.username.root,
                is_admin=result.profile.is_admin,
                provider_token=provider_token,
            )
            return SignUpResponse(
                token=token,
                user_id=str(result.profile.id),
                username=result.profile.username.root,
                route=result.route,
            )
