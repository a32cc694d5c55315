"""Comment use cases."""

from .add_comment import AddCommentRequest, AddCommentUseCase, CommentResponse
from .delete_comment import DeleteCommentUseCase
from .list_comments import ListCommentsResponse, ListCommentsUseCase

__all__ = [
    "AddCommentRequest",
    "AddCommentUseCase",
    "CommentResponse",
    "DeleteCommentUseCase",
    "ListCommentsResponse",
    "ListCommentsUseCase",
]
