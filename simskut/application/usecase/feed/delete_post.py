"""Delete post use case."""

from simskut.domain.service import FeedService, ProfileService
from simskut.domain.value import PostId, UserId


class DeletePostUseCase:
    """Use case for removing a post (author or admin)."""

    def __init__(
        self, feed_service: FeedService, profile_service: ProfileService
    ) -> None:
        """Initialize delete post use case.

        Args:
            feed_service: Feed domain service
            profile_service: Profile domain service
        """
        self.feed_service = feed_service
        self.profile_service = profile_service

    async def execute(self, post_id: PostId, user_id: UserId) -> None:
        """Delete the post with its likes and comments.

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the caller is neither author nor admin
        """
        profile = await self.profile_service.fetch_profile(user_id)
        is_admin = profile is not None and profile.is_admin
        await self.feed_service.delete_post(post_id, user_id, is_admin=is_admin)
