"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from simskut.application.session import SessionContext
from simskut.application.usecase.auth import (
    AuthCallbackUseCase,
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    SignInUseCase,
    SignOutUseCase,
    SignUpUseCase,
)
from simskut.application.usecase.auth.auth_callback import AuthCallbackRequest
from simskut.application.usecase.auth.change_password import ChangePasswordRequest
from simskut.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from simskut.application.usecase.auth.sign_in import SignInRequest
from simskut.application.usecase.auth.sign_up import SignUpRequest
from simskut.config import Settings
from simskut.domain.error import NotFoundError
from simskut.domain.service import AuthService
from simskut.domain.value import AppRoute, OAuthProvider
from simskut.interface.api.auth import require_user
from simskut.interface.api.cookies import (
    clear_auth_cookie,
    clear_pkce_cookie,
    set_auth_cookie,
    set_pkce_cookie,
)
from simskut.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class AuthResultResponse(BaseModel):
    """Result of a sign-up or sign-in; the token travels in the cookie."""

    user_id: str
    username: str
    route: AppRoute


class OAuthStartResponse(BaseModel):
    """Where to send the browser to sign in with a provider."""

    authorization_url: str


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    /auth/me returns the current user if authenticated, or an
    unauthenticated state without raising an error.
    """

    authenticated: bool
    user: GetCurrentUserResponse | None = None


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class ChangePasswordAPIRequest(BaseModel):
    """API request for changing the password."""

    password: str = Field(min_length=8)


@router.post(
    "/signup", response_model=AuthResultResponse, status_code=status.HTTP_201_CREATED
)
async def sign_up(
    request: SignUpRequest,
    response: Response,
    sign_up_use_case: FromDishka[SignUpUseCase],
    settings: FromDishka[Settings],
) -> AuthResultResponse:
    """Register with email and password.

    Creates the profile and its pending invite, then sets the auth cookie.
    New users land on /pending until an admin approves the invite.
    """
    logger.info(f"Sign-up requested for username={request.username}")
    result = await sign_up_use_case.execute(request)
    set_auth_cookie(response, result.token, settings)
    return AuthResultResponse(
        user_id=result.user_id, username=result.username, route=result.route
    )


@router.post("/signin", response_model=AuthResultResponse)
async def sign_in(
    request: SignInRequest,
    response: Response,
    sign_in_use_case: FromDishka[SignInUseCase],
    settings: FromDishka[Settings],
) -> AuthResultResponse:
    """Sign in with email and password and set the auth cookie."""
    result = await sign_in_use_case.execute(request)
    set_auth_cookie(response, result.token, settings)
    logger.info(f"Signed in user_id={result.user_id} route={result.route.value}")
    return AuthResultResponse(
        user_id=result.user_id, username=result.username, route=result.route
    )


@router.post("/oauth/{provider}", response_model=OAuthStartResponse)
async def start_oauth(
    provider: OAuthProvider,
    response: Response,
    auth_service: FromDishka[AuthService],
    settings: FromDishka[Settings],
) -> OAuthStartResponse:
    """Start a Discord or Google sign-in.

    The PKCE verifier is kept in a short-lived cookie for the callback.

    Example:
        POST /auth/oauth/discord

        Response:
        {
            "authorization_url": "https://<project>.supabase.co/auth/v1/authorize?provider=discord&..."
        }
    """
    redirect = auth_service.sign_in_with_oauth(provider, settings.auth.oauth_redirect_url)
    if redirect.code_verifier:
        set_pkce_cookie(response, redirect.code_verifier, settings)
    return OAuthStartResponse(authorization_url=redirect.url)


@router.get("/callback")
async def oauth_callback(
    auth_callback_use_case: FromDishka[AuthCallbackUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    access_token: str | None = None,
    pkce_verifier: str | None = Cookie(default=None),
):
    """Finish an OAuth sign-in and redirect to the landing route.

    Waits for a session up to auth.callback_timeout_seconds; on timeout or
    failure the browser is redirected to /login.

    Example:
        GET /auth/callback?code=abc123

        Redirects to: https://simskut.app/pending
        Sets cookie: auth_token
    """
    result = await auth_callback_use_case.execute(
        AuthCallbackRequest(
            code=code, code_verifier=pkce_verifier, access_token=access_token
        )
    )
    redirect_url = f"{settings.api.frontend_url}{result.route.value}"
    redirect_response = RedirectResponse(
        url=redirect_url, status_code=status.HTTP_302_FOUND
    )
    # Cookies must be set on the returned response object itself
    if result.token:
        set_auth_cookie(redirect_response, result.token, settings)
        logger.info(f"OAuth sign-in complete, redirecting to {redirect_url}")
    else:
        logger.warning("OAuth callback produced no session, redirecting to login")
    clear_pkce_cookie(redirect_response, settings)
    return redirect_response


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    Safe to call without authentication: returns authenticated=false instead
    of raising, so the frontend can check state without error logs.
    """
    if not auth_token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
        return AuthStatusResponse(authenticated=True, user=user)
    except (JWTError, NotFoundError):
        return AuthStatusResponse(authenticated=False)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    sign_out_use_case: FromDishka[SignOutUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    session_context: FromDishka[SessionContext],
    settings: FromDishka[Settings],
    auth_token: str | None = Cookie(default=None),
) -> LogoutResponse:
    """Sign out of the provider and clear the auth cookie.

    The cookie is cleared even when the session is already invalid.
    """
    provider_token = None
    if auth_token:
        try:
            await get_current_user_use_case.execute(GetCurrentUserRequest(token=auth_token))
            provider_token = session_context.view.provider_token
        except (JWTError, NotFoundError):
            logger.info("Logout with an invalid session cookie")
    await sign_out_use_case.execute(provider_token)
    clear_auth_cookie(response, settings)
    return LogoutResponse(success=True, message="Successfully logged out")


@router.post("/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    request: ChangePasswordAPIRequest,
    change_password_use_case: FromDishka[ChangePasswordUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    session_context: FromDishka[SessionContext],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Change the signed-in user's password."""
    await require_user(auth_token, get_current_user_use_case, "change your password")
    await change_password_use_case.execute(
        ChangePasswordRequest(
            provider_token=session_context.view.provider_token,
            password=request.password,
        )
    )
