"""Email sign-in use case."""

import logfire
from pydantic import BaseModel

from simskut.application.session import SessionContext
from simskut.domain.service import AuthService, JWTService
from simskut.domain.service.gate import resolve_route
from simskut.domain.value import AppRoute

from .bootstrap import BootstrapRequest, BootstrapUseCase


class SignInRequest(BaseModel):
    """Email/password credentials."""

    email: str
    password: str


class SignInResponse(BaseModel):
    """Sign-in result."""

    token: str
    user_id: str
    username: str
    route: AppRoute


class SignInUseCase:
    """Use case for signing in with email and password."""

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        bootstrap_use_case: BootstrapUseCase,
        session_context: SessionContext,
    ) -> None:
        """Initialize sign-in use case.

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

    async def execute(self, request: SignInRequest) -> SignInResponse:
        """Sign in and pick the landing route through the gate.

        Raises:
            AuthGatewayError: If the credentials are rejected
        """
        with logfire.span("sign_in.execute"):
            session = await self.auth_service.sign_in_with_email(
                request.email, request.password
            )
            result = await self.bootstrap_use_case.execute(
                BootstrapRequest(identity=session.identity)
            )
            profile = result.profile
            route = resolve_route(profile, result.invite)

            self.session_context.set_session(profile.id, profile, session.access_token)
            token = self.jwt_service.create_token(
                user_id=str(profile.id),
                username=profile.username.root,
                is_admin=profile.is_admin,
                provider_token=session.access_token,
            )
            return SignInResponse(
                token=token,
                user_id=str(profile.id),
                username=profile.username.root,
                route=route,
            )
