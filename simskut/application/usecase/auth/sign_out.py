"""Sign out use case."""

import logfire

from simskut.application.session import SessionContext
from simskut.domain.service import AuthService


class SignOutUseCase:
    """Use case for ending the session with the auth provider."""

    def __init__(
        self, auth_service: AuthService, session_context: SessionContext
    ) -> None:
        """Initialize sign out use case.

        Args:
            auth_service: Authentication domain service
            session_context: Request session context
        """
        self.auth_service = auth_service
        self.session_context = session_context

    async def execute(self, provider_token: str | None) -> None:
        """Revoke the provider session and clear the request session.

        Provider failures are logged; the API cookie is dropped regardless.
        """
        try:
            await self.auth_service.sign_out(provider_token)
        except Exception as e:
            logfire.warn("Provider sign-out failed", error=str(e))
        self.session_context.clear()
