"""Profile use cases."""

from .admin_users import ListUsersRequest, ListUsersUseCase, SetAdminRequest, SetAdminUseCase
from .get_profile import GetProfileResponse, GetProfileUseCase, ProfileResponse
from .search_users import SearchUsersResponse, SearchUsersUseCase
from .update_profile import (
    ChangeUsernameRequest,
    ChangeUsernameUseCase,
    UpdateProfileUseCase,
    UploadProfileImageUseCase,
)

__all__ = [
    "ChangeUsernameRequest",
    "ChangeUsernameUseCase",
    "GetProfileResponse",
    "GetProfileUseCase",
    "ListUsersRequest",
    "ListUsersUseCase",
    "ProfileResponse",
    "SearchUsersResponse",
    "SearchUsersUseCase",
    "SetAdminRequest",
    "SetAdminUseCase",
    "UpdateProfileUseCase",
    "UploadProfileImageUseCase",
]
