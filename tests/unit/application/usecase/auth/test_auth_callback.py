"""Unit tests for the OAuth callback use case."""

from uuid import uuid4

import pytest

from simskut.adapter.error import AuthGatewayError
from simskut.adapter.supabase.auth import MockAuthDirectory
from simskut.application.session import SessionContext
from simskut.application.usecase.auth import AuthCallbackUseCase, BootstrapUseCase
from simskut.application.usecase.auth.auth_callback import AuthCallbackRequest
from simskut.config import AuthSettings
from simskut.domain.service import AuthGateway, AuthService, JWTService
from simskut.domain.value import AppRoute, AuthIdentity
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _use_case(env, timeout: float = 1.0) -> AuthCallbackUseCase:
    return AuthCallbackUseCase(
        auth_service=await env.get(AuthService),
        jwt_service=await env.get(JWTService),
        bootstrap_use_case=await env.get(BootstrapUseCase),
        session_context=await env.get(SessionContext),
        auth_settings=AuthSettings(callback_timeout_seconds=timeout),
    )


class TestAuthCallback:
    """Tests for racing the session read, the code exchange and SIGNED_IN."""

    @pytest.mark.asyncio
    async def test_code_exchange_signs_in(self, unit_env):
        """A valid code yields a token and the pending route for a new user."""
        # Arrange
        directory = await unit_env.get(MockAuthDirectory)
        identity = AuthIdentity(
            user_id=str(uuid4()),
            email="bella@example.com",
            metadata={"preferred_username": "bella", "full_name": "Bella Goth"},
        )
        directory.register_code("code-123", identity)
        use_case = await _use_case(unit_env)

        # Act
        result = await use_case.execute(
            AuthCallbackRequest(code="code-123", code_verifier="verifier")
        )

        # Assert
        jwt_service = await unit_env.get(JWTService)
        session_context = await unit_env.get(SessionContext)
        assert result.route == AppRoute.PENDING
        assert result.user_id == identity.user_id
        assert jwt_service.get_user_id_from_token(result.token) == identity.user_id
        assert session_context.view.profile.display_name == "Bella Goth"

    @pytest.mark.asyncio
    async def test_existing_session_wins_without_code(self, unit_env):
        """A valid provider token is enough; no code exchange is started."""
        # Arrange
        directory = await unit_env.get(MockAuthDirectory)
        session = directory.issue_session(
            AuthIdentity(user_id=str(uuid4()), email="mortimer@example.com")
        )
        use_case = await _use_case(unit_env)

        # Act
        result = await use_case.execute(
            AuthCallbackRequest(access_token=session.access_token)
        )

        # Assert
        assert result.token is not None
        assert result.route == AppRoute.PENDING

    @pytest.mark.asyncio
    async def test_hung_exchange_times_out_to_login(self, unit_env):
        """A code exchange that never returns ends on /login at the timeout."""
        # Arrange
        directory = await unit_env.get(MockAuthDirectory)
        directory.exchange_hangs = True
        gateway = await unit_env.get(AuthGateway)
        use_case = await _use_case(unit_env, timeout=0.05)

        # Act
        result = await use_case.execute(AuthCallbackRequest(code="never"))

        # Assert
        assert result.route == AppRoute.LOGIN
        assert result.token is None
        assert gateway.listener_count == 0

    @pytest.mark.asyncio
    async def test_failed_exchange_goes_to_login(self, unit_env):
        """A rejected code ends on /login without waiting for the timeout."""
        # Arrange
        directory = await unit_env.get(MockAuthDirectory)
        directory.exchange_error = AuthGatewayError("Invalid code", status_code=400)
        gateway = await unit_env.get(AuthGateway)
        use_case = await _use_case(unit_env, timeout=30.0)

        # Act
        result = await use_case.execute(AuthCallbackRequest(code="bad"))

        # Assert
        assert result.route == AppRoute.LOGIN
        assert gateway.listener_count == 0
