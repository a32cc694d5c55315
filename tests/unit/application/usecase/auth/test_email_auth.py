"""Unit tests for email sign-up and sign-in."""

import pytest

from simskut.adapter.error import AuthGatewayError
from simskut.application.usecase.auth import SignInUseCase, SignUpUseCase
from simskut.application.usecase.auth.sign_in import SignInRequest
from simskut.application.usecase.auth.sign_up import SignUpRequest
from simskut.domain.repository import InviteRepository, ProfileRepository
from simskut.domain.service import InviteService, JWTService
from simskut.domain.value import AppRoute
from tests.conftest import make_profile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _sign_up_request(**overrides) -> SignUpRequest:
    fields = {
        "email": "bella@example.com",
        "password": "plumbob123",
        "username": "bella",
        "display_name": "Bella Goth",
    }
    fields.update(overrides)
    return SignUpRequest(**fields)


class TestSignUp:
    """Tests for SignUpUseCase."""

    @pytest.mark.asyncio
    async def test_sign_up_lands_on_pending(self, unit_env):
        """A new account gets its profile, a pending invite and a token."""
        # Arrange
        use_case = await unit_env.get(SignUpUseCase)
        jwt_service = await unit_env.get(JWTService)
        profile_repo = await unit_env.get(ProfileRepository)

        # Act
        result = await use_case.execute(_sign_up_request())

        # Assert
        assert result.route == AppRoute.PENDING
        assert result.username == "bella"
        assert jwt_service.get_user_id_from_token(result.token) == result.user_id
        profile = await profile_repo.find_by_username("bella")
        assert profile.display_name == "Bella Goth"

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, unit_env):
        """The provider rejects a second account with the same email."""
        use_case = await unit_env.get(SignUpUseCase)
        await use_case.execute(_sign_up_request())

        with pytest.raises(AuthGatewayError):
            await use_case.execute(_sign_up_request(username="outra"))


class TestSignIn:
    """Tests for SignInUseCase."""

    @pytest.mark.asyncio
    async def test_route_follows_approval(self, unit_env):
        """Sign-in lands on /pending until the invite is approved, then /feed."""
        # Arrange
        sign_up = await unit_env.get(SignUpUseCase)
        sign_in = await unit_env.get(SignInUseCase)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        profile_repo = await unit_env.get(ProfileRepository)
        admin = await profile_repo.create(make_profile("chefe", is_admin=True))
        registered = await sign_up.execute(_sign_up_request())
        credentials = SignInRequest(email="bella@example.com", password="plumbob123")

        # Act
        before = await sign_in.execute(credentials)
        user = await profile_repo.find_by_username("bella")
        invite = await invite_repo.find_latest_for_user(user.id)
        await invite_service.approve_invite(invite.id, admin.id)
        after = await sign_in.execute(credentials)

        # Assert
        assert before.user_id == registered.user_id
        assert before.route == AppRoute.PENDING
        assert after.route == AppRoute.FEED

    @pytest.mark.asyncio
    async def test_wrong_password(self, unit_env):
        """Bad credentials raise AuthGatewayError."""
        sign_up = await unit_env.get(SignUpUseCase)
        sign_in = await unit_env.get(SignInUseCase)
        await sign_up.execute(_sign_up_request())

        with pytest.raises(AuthGatewayError):
            await sign_in.execute(
                SignInRequest(email="bella@example.com", password="errada123")
            )
