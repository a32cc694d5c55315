"""Friendship use cases."""

from .list_friends import FriendSummary, ListFriendsResponse, ListFriendsUseCase
from .manage_friendship import (
    AcceptFriendRequestUseCase,
    FriendshipResponse,
    FriendshipStatusResponse,
    GetFriendshipStatusUseCase,
    RemoveFriendshipUseCase,
    SendFriendRequestUseCase,
)

__all__ = [
    "AcceptFriendRequestUseCase",
    "FriendSummary",
    "FriendshipResponse",
    "FriendshipStatusResponse",
    "GetFriendshipStatusUseCase",
    "ListFriendsResponse",
    "ListFriendsUseCase",
    "RemoveFriendshipUseCase",
    "SendFriendRequestUseCase",
]
