"""Domain layer DI providers."""

from dishka import Scope, provide

from simskut.config import (
    AuthSettings,
    FeedSettings,
    GallerySettings,
    InvitationSettings,
    NotificationSettings,
    PushSettings,
)
from simskut.domain.repository import (
    CommentRepository,
    FriendshipRepository,
    InviteRepository,
    NotificationRepository,
    PostRepository,
    ProfileRepository,
    PushSubscriptionRepository,
)
from simskut.domain.service import (
    AuthGateway,
    AuthService,
    FeedService,
    FriendshipService,
    GalleryProxy,
    GalleryService,
    InviteService,
    JWTService,
    NotificationService,
    ObjectStorage,
    ProfileService,
    PushDeliveryService,
    PushSender,
)
from simskut.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, auth_gateway: AuthGateway) -> AuthService:
        """Provide authentication domain service."""
        return AuthService(auth_gateway=auth_gateway)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        invitation_settings: InvitationSettings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_profile_service(
        self, profile_repository: ProfileRepository, storage: ObjectStorage
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(profile_repository=profile_repository, storage=storage)

    @provide
    def get_feed_service(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        feed_settings: FeedSettings,
    ) -> FeedService:
        """Provide feed domain service."""
        return FeedService(
            post_repository=post_repository,
            comment_repository=comment_repository,
            feed_settings=feed_settings,
        )

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        profile_repository: ProfileRepository,
        notification_settings: NotificationSettings,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            notification_repository=notification_repository,
            profile_repository=profile_repository,
            notification_settings=notification_settings,
        )

    @provide
    def get_friendship_service(
        self, friendship_repository: FriendshipRepository
    ) -> FriendshipService:
        """Provide friendship domain service."""
        return FriendshipService(friendship_repository=friendship_repository)

    @provide
    def get_push_delivery_service(
        self,
        push_subscription_repository: PushSubscriptionRepository,
        push_sender: PushSender,
        push_settings: PushSettings,
    ) -> PushDeliveryService:
        """Provide push delivery domain service."""
        return PushDeliveryService(
            push_subscription_repository=push_subscription_repository,
            push_sender=push_sender,
            push_settings=push_settings,
        )

    @provide
    def get_gallery_service(
        self, gallery_proxy: GalleryProxy, gallery_settings: GallerySettings
    ) -> GalleryService:
        """Provide gallery import domain service."""
        return GalleryService(
            gallery_proxy=gallery_proxy, gallery_settings=gallery_settings
        )
