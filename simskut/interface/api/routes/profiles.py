"""Profile routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, File, Query, UploadFile
from pydantic import BaseModel, Field

from simskut.application.usecase.auth import GetCurrentUserUseCase
from simskut.application.usecase.profile import (
    ChangeUsernameRequest,
    ChangeUsernameUseCase,
    GetProfileResponse,
    GetProfileUseCase,
    ProfileResponse,
    SearchUsersResponse,
    SearchUsersUseCase,
    UpdateProfileUseCase,
    UploadProfileImageUseCase,
)
from simskut.domain.service import ProfileUpdate
from simskut.interface.api.auth import require_member, require_user, user_id_of

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["profiles"], route_class=DishkaRoute)


class ChangeUsernameAPIRequest(BaseModel):
    """API request for changing the username base and tag."""

    base: str = Field(min_length=1, max_length=32)
    tag: str | None = None


@router.get("/search", response_model=SearchUsersResponse)
async def search_users(
    search_users_use_case: FromDishka[SearchUsersUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    q: str = Query(default="", max_length=32),
    auth_token: str | None = Cookie(default=None),
) -> SearchUsersResponse:
    """Username prefix search for the @mention autocomplete."""
    await require_member(auth_token, get_current_user_use_case, "search users")
    return await search_users_use_case.execute(q)


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    request: ProfileUpdate,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ProfileResponse:
    """Edit the signed-in user's profile. Omitted fields are unchanged."""
    user = await require_user(auth_token, get_current_user_use_case, "edit your profile")
    return await update_profile_use_case.execute(user_id_of(user), request)


@router.put("/me/username", response_model=ProfileResponse)
async def change_username(
    request: ChangeUsernameAPIRequest,
    change_username_use_case: FromDishka[ChangeUsernameUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ProfileResponse:
    """Change the username base; the 4-digit tag may be changed once."""
    user = await require_user(
        auth_token, get_current_user_use_case, "change your username"
    )
    result = await change_username_use_case.execute(
        ChangeUsernameRequest(
            user_id=user_id_of(user), base=request.base, tag=request.tag
        )
    )
    logger.info(f"Username changed from {user.username} to {result.username}")
    return result


@router.post("/me/{kind}", response_model=ProfileResponse)
async def upload_profile_image(
    kind: str,
    upload_profile_image_use_case: FromDishka[UploadProfileImageUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    file: UploadFile = File(...),
    auth_token: str | None = Cookie(default=None),
) -> ProfileResponse:
    """Upload an avatar or banner image (already cropped by the client)."""
    user = await require_user(auth_token, get_current_user_use_case, "upload images")
    data = await file.read()
    return await upload_profile_image_use_case.execute(
        user_id_of(user), kind, data, file.content_type or "application/octet-stream"
    )


@router.get("/{username}", response_model=GetProfileResponse)
async def get_profile(
    username: str,
    get_profile_use_case: FromDishka[GetProfileUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetProfileResponse:
    """Public profile by username, with the viewer's friendship status."""
    user = await require_member(auth_token, get_current_user_use_case, "view profiles")
    return await get_profile_use_case.execute(username, user_id_of(user))
