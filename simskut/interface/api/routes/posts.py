"""Feed post and comment routes."""

import logging
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from simskut.application.usecase.auth import GetCurrentUserUseCase
from simskut.application.usecase.comment import (
    AddCommentRequest,
    AddCommentUseCase,
    CommentResponse,
    DeleteCommentUseCase,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from simskut.application.usecase.feed import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostResponse,
    ToggleLikeResponse,
    ToggleLikeUseCase,
)
from simskut.domain.value import CommentId, PostId
from simskut.interface.api.auth import require_member, user_id_of

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    content: str | None = Field(default=None, max_length=280)
    image_urls: list[str] = Field(default_factory=list, max_length=4)


class AddCommentAPIRequest(BaseModel):
    """API request for commenting on a post."""

    content: str = Field(min_length=1, max_length=500)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """Page through the feed, newest first."""
    user = await require_member(auth_token, get_current_user_use_case, "view the feed")
    return await list_posts_use_case.execute(
        ListPostsRequest(viewer_id=user_id_of(user), limit=limit, offset=offset)
    )


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> PostResponse:
    """Publish a post.

    Mentioned users are notified in the background after the post is saved.
    """
    user = await require_member(auth_token, get_current_user_use_case, "create posts")
    result = await create_post_use_case.execute(
        CreatePostRequest(
            author_id=user_id_of(user),
            content=request.content,
            image_urls=request.image_urls,
        )
    )
    logger.info(f"Post {result.id} created by {user.username}")
    return result


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> PostResponse:
    """A single post with counts."""
    user = await require_member(auth_token, get_current_user_use_case, "view posts")
    return await get_post_use_case.execute(PostId(post_id), user_id_of(user))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: UUID,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete a post. Only its author or an admin may do this."""
    user = await require_member(auth_token, get_current_user_use_case, "delete posts")
    await delete_post_use_case.execute(PostId(post_id), user_id_of(user))


@router.post("/{post_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    post_id: UUID,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ToggleLikeResponse:
    """Like the post, or remove the like if already liked."""
    user = await require_member(auth_token, get_current_user_use_case, "like posts")
    return await toggle_like_use_case.execute(PostId(post_id), user_id_of(user))


@router.get("/{post_id}/comments", response_model=ListCommentsResponse)
async def list_comments(
    post_id: UUID,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ListCommentsResponse:
    """Comments on a post, oldest first."""
    await require_member(auth_token, get_current_user_use_case, "view comments")
    return await list_comments_use_case.execute(PostId(post_id))


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: UUID,
    request: AddCommentAPIRequest,
    add_comment_use_case: FromDishka[AddCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Comment on a post; the post author and mentioned users are notified."""
    user = await require_member(auth_token, get_current_user_use_case, "comment")
    return await add_comment_use_case.execute(
        AddCommentRequest(
            post_id=PostId(post_id), author_id=user_id_of(user), content=request.content
        )
    )


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete a comment. Only its author or an admin may do this."""
    user = await require_member(auth_token, get_current_user_use_case, "delete comments")
    await delete_comment_use_case.execute(CommentId(comment_id), user_id_of(user))
