"""Delete comment use case."""

from simskut.domain.service import FeedService, ProfileService
from simskut.domain.value import CommentId, UserId


class DeleteCommentUseCase:
    """Use case for removing a comment (author or admin)."""

    def __init__(
        self, feed_service: FeedService, profile_service: ProfileService
    ) -> None:
        """Initialize delete comment use case.

        Args:
            feed_service: Feed domain service
            profile_service: Profile domain service
        """
        self.feed_service = feed_service
        self.profile_service = profile_service

    async def execute(self, comment_id: CommentId, user_id: UserId) -> None:
        """Delete the comment.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the caller is neither author nor admin
        """
        profile = await self.profile_service.fetch_profile(user_id)
        is_admin = profile is not None and profile.is_admin
        await self.feed_service.delete_comment(comment_id, user_id, is_admin=is_admin)
