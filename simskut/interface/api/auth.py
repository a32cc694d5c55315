"""Request authentication helpers shared by the routes."""

from uuid import UUID

from fastapi import HTTPException, status

from simskut.application.usecase.auth import GetCurrentUserUseCase
from simskut.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from simskut.domain.error import NotFoundError
from simskut.domain.value import AppRoute, UserId
from simskut.util.jwt import JWTError

AUTH_COOKIE = "auth_token"


async def require_user(
    auth_token: str | None,
    get_current_user_use_case: GetCurrentUserUseCase,
    action: str = "use this endpoint",
) -> GetCurrentUserResponse:
    """Resolve the auth cookie into the current user.

    Args:
        auth_token: JWT from the auth_token cookie
        get_current_user_use_case: Get current user use case from DI
        action: Phrase used in the 401 message

    Returns:
        The signed-in user

    Raises:
        HTTPException: 401 if the cookie is missing, invalid, or its profile is gone
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
    except JWTError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Profile not found for this session",
        )


async def require_member(
    auth_token: str | None,
    get_current_user_use_case: GetCurrentUserUseCase,
    action: str = "use this endpoint",
) -> GetCurrentUserResponse:
    """Like require_user, but the user must also have passed the invite gate.

    Raises:
        HTTPException: 401 if not signed in, 403 if the invite is not approved
    """
    user = await require_user(auth_token, get_current_user_use_case, action)
    if user.route not in (AppRoute.FEED, AppRoute.ADMIN):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your invite has not been approved yet",
        )
    return user


def user_id_of(user: GetCurrentUserResponse) -> UserId:
    """Typed id of the signed-in user."""
    return UserId(UUID(user.user_id))
