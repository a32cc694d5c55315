"""Friendship routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status

from simskut.application.usecase.auth import GetCurrentUserUseCase
from simskut.application.usecase.friendship import (
    AcceptFriendRequestUseCase,
    FriendshipResponse,
    FriendshipStatusResponse,
    GetFriendshipStatusUseCase,
    ListFriendsResponse,
    ListFriendsUseCase,
    RemoveFriendshipUseCase,
    SendFriendRequestUseCase,
)
from simskut.domain.value import FriendshipId, UserId
from simskut.interface.api.auth import require_member, user_id_of

router = APIRouter(prefix="/friendships", tags=["friendships"], route_class=DishkaRoute)


@router.get("", response_model=ListFriendsResponse)
async def list_friends(
    list_friends_use_case: FromDishka[ListFriendsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ListFriendsResponse:
    """Accepted friends and incoming requests."""
    user = await require_member(auth_token, get_current_user_use_case, "view friends")
    return await list_friends_use_case.execute(user_id_of(user))


@router.get("/{user_id}", response_model=FriendshipStatusResponse)
async def get_status(
    user_id: UUID,
    get_friendship_status_use_case: FromDishka[GetFriendshipStatusUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FriendshipStatusResponse:
    """Friendship status between the viewer and another user."""
    user = await require_member(auth_token, get_current_user_use_case, "view friends")
    return await get_friendship_status_use_case.execute(user_id_of(user), UserId(user_id))


@router.post(
    "/{user_id}", response_model=FriendshipResponse, status_code=status.HTTP_201_CREATED
)
async def send_request(
    user_id: UUID,
    send_friend_request_use_case: FromDishka[SendFriendRequestUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FriendshipResponse:
    """Send a friend request."""
    user = await require_member(auth_token, get_current_user_use_case, "add friends")
    return await send_friend_request_use_case.execute(user_id_of(user), UserId(user_id))


@router.post("/requests/{friendship_id}/accept", response_model=FriendshipResponse)
async def accept_request(
    friendship_id: UUID,
    accept_friend_request_use_case: FromDishka[AcceptFriendRequestUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FriendshipResponse:
    """Accept an incoming friend request."""
    user = await require_member(auth_token, get_current_user_use_case, "accept friends")
    return await accept_friend_request_use_case.execute(
        FriendshipId(friendship_id), user_id_of(user)
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_friendship(
    user_id: UUID,
    remove_friendship_use_case: FromDishka[RemoveFriendshipUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Cancel, decline or unfriend."""
    user = await require_member(auth_token, get_current_user_use_case, "remove friends")
    await remove_friendship_use_case.execute(user_id_of(user), UserId(user_id))
