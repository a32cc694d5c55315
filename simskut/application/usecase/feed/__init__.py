"""Feed use cases."""

from .create_post import CreatePostRequest, CreatePostUseCase
from .delete_post import DeletePostUseCase
from .list_posts import (
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from .post_response import PostResponse
from .toggle_like import ToggleLikeResponse, ToggleLikeUseCase

__all__ = [
    "CreatePostRequest",
    "CreatePostUseCase",
    "DeletePostUseCase",
    "GetPostUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "PostResponse",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
]
