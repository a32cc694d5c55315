"""Application layer DI providers."""

from collections.abc import AsyncIterator

from dishka import AsyncContainer, Scope, provide

from simskut.application.session import SessionContext
from simskut.application.usecase.auth import (
    AuthCallbackUseCase,
    BootstrapUseCase,
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    SignInUseCase,
    SignOutUseCase,
    SignUpUseCase,
)
from simskut.application.usecase.comment import (
    AddCommentUseCase,
    DeleteCommentUseCase,
    ListCommentsUseCase,
)
from simskut.application.usecase.feed import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    ToggleLikeUseCase,
)
from simskut.application.usecase.friendship import (
    AcceptFriendRequestUseCase,
    GetFriendshipStatusUseCase,
    ListFriendsUseCase,
    RemoveFriendshipUseCase,
    SendFriendRequestUseCase,
)
from simskut.application.usecase.gallery import (
    DeepFetchGalleryItemsUseCase,
    ListGalleryItemsUseCase,
)
from simskut.application.usecase.invite import (
    ApproveInviteUseCase,
    GetInviteStatsUseCase,
    GetMyInviteUseCase,
    ListInvitesUseCase,
    RejectInviteUseCase,
    SyncApprovalUseCase,
)
from simskut.application.usecase.notification import (
    DeleteNotificationUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
)
from simskut.application.usecase.profile import (
    ChangeUsernameUseCase,
    GetProfileUseCase,
    ListUsersUseCase,
    SearchUsersUseCase,
    SetAdminUseCase,
    UpdateProfileUseCase,
    UploadProfileImageUseCase,
)
from simskut.application.usecase.push import (
    DeliverPushUseCase,
    GetVapidKeyUseCase,
    SubscribePushUseCase,
    UnsubscribePushUseCase,
)
from simskut.config import AuthSettings, NotificationSettings, PushSettings
from simskut.domain.service import (
    AuthService,
    FeedService,
    FriendshipService,
    GalleryService,
    InviteService,
    JWTService,
    NotificationService,
    ProfileService,
    PushDeliveryService,
)
from simskut.util.di.base import ProviderBase
from simskut.util.tasks import BackgroundDispatcher, JobOutbox


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.APP)
    def get_background_dispatcher(self, container: AsyncContainer) -> BackgroundDispatcher:
        """Provide the background job dispatcher."""
        return BackgroundDispatcher(container=container)

    @provide(scope=Scope.REQUEST)
    async def get_job_outbox(
        self, dispatcher: BackgroundDispatcher
    ) -> AsyncIterator[JobOutbox]:
        """Provide the post-commit job outbox.

        dishka sends the scope's exception, if any, into the generator.
        """
        outbox = JobOutbox(dispatcher=dispatcher)
        exception = yield outbox
        if exception is None:
            outbox.release()
        else:
            outbox.discard()

    @provide(scope=Scope.REQUEST)
    def get_session_context(self) -> SessionContext:
        """Provide the per-request session context."""
        return SessionContext()

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_bootstrap_use_case(
        self, profile_service: ProfileService, invite_service: InviteService
    ) -> BootstrapUseCase:
        """Provide bootstrap use case."""
        return BootstrapUseCase(
            profile_service=profile_service, invite_service=invite_service
        )

    @provide(scope=Scope.REQUEST)
    def get_sign_up_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        bootstrap_use_case: BootstrapUseCase,
        session_context: SessionContext,
    ) -> SignUpUseCase:
        """Provide sign up use case."""
        return SignUpUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            bootstrap_use_case=bootstrap_use_case,
            session_context=session_context,
        )

    @provide(scope=Scope.REQUEST)
    def get_sign_in_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        bootstrap_use_case: BootstrapUseCase,
        session_context: SessionContext,
    ) -> SignInUseCase:
        """Provide sign in use case."""
        return SignInUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            bootstrap_use_case=bootstrap_use_case,
            session_context=session_context,
        )

    @provide(scope=Scope.REQUEST)
    def get_auth_callback_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        bootstrap_use_case: BootstrapUseCase,
        session_context: SessionContext,
        auth_settings: AuthSettings,
    ) -> AuthCallbackUseCase:
        """Provide OAuth callback use case."""
        return AuthCallbackUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            bootstrap_use_case=bootstrap_use_case,
            session_context=session_context,
            auth_settings=auth_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self,
        jwt_service: JWTService,
        profile_service: ProfileService,
        invite_service: InviteService,
        session_context: SessionContext,
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            jwt_service=jwt_service,
            profile_service=profile_service,
            invite_service=invite_service,
            session_context=session_context,
        )

    @provide(scope=Scope.REQUEST)
    def get_sign_out_use_case(
        self, auth_service: AuthService, session_context: SessionContext
    ) -> SignOutUseCase:
        """Provide sign out use case."""
        return SignOutUseCase(
            auth_service=auth_service, session_context=session_context
        )

    @provide(scope=Scope.REQUEST)
    def get_change_password_use_case(
        self, auth_service: AuthService
    ) -> ChangePasswordUseCase:
        """Provide change password use case."""
        return ChangePasswordUseCase(auth_service=auth_service)

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_my_invite_use_case(self, invite_service: InviteService) -> GetMyInviteUseCase:
        """Provide get my invite use case."""
        return GetMyInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_sync_approval_use_case(
        self, invite_service: InviteService, profile_service: ProfileService
    ) -> SyncApprovalUseCase:
        """Provide approval sync use case."""
        return SyncApprovalUseCase(
            invite_service=invite_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_invites_use_case(
        self, invite_service: InviteService, profile_service: ProfileService
    ) -> ListInvitesUseCase:
        """Provide list invites use case."""
        return ListInvitesUseCase(
            invite_service=invite_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_approve_invite_use_case(
        self, invite_service: InviteService, profile_service: ProfileService
    ) -> ApproveInviteUseCase:
        """Provide approve invite use case."""
        return ApproveInviteUseCase(
            invite_service=invite_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_reject_invite_use_case(
        self, invite_service: InviteService, profile_service: ProfileService
    ) -> RejectInviteUseCase:
        """Provide reject invite use case."""
        return RejectInviteUseCase(
            invite_service=invite_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_invite_stats_use_case(
        self,
        invite_service: InviteService,
        profile_service: ProfileService,
        feed_service: FeedService,
    ) -> GetInviteStatsUseCase:
        """Provide invite stats use case."""
        return GetInviteStatsUseCase(
            invite_service=invite_service,
            profile_service=profile_service,
            feed_service=feed_service,
        )

    # Feed use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, feed_service: FeedService, outbox: JobOutbox
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(feed_service=feed_service, outbox=outbox)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(self, feed_service: FeedService) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(feed_service=feed_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(self, feed_service: FeedService) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(feed_service=feed_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(
        self, feed_service: FeedService, profile_service: ProfileService
    ) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(
            feed_service=feed_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(
        self, feed_service: FeedService, notification_service: NotificationService
    ) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(
            feed_service=feed_service, notification_service=notification_service
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_add_comment_use_case(
        self,
        feed_service: FeedService,
        notification_service: NotificationService,
        profile_service: ProfileService,
        outbox: JobOutbox,
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(
            feed_service=feed_service,
            notification_service=notification_service,
            profile_service=profile_service,
            outbox=outbox,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self, feed_service: FeedService
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(feed_service=feed_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, feed_service: FeedService, profile_service: ProfileService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            feed_service=feed_service, profile_service=profile_service
        )

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_list_notifications_use_case(
        self, notification_service: NotificationService
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_notification_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationReadUseCase:
        """Provide mark notification read use case."""
        return MarkNotificationReadUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_all_notifications_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllNotificationsReadUseCase:
        """Provide mark all notifications read use case."""
        return MarkAllNotificationsReadUseCase(
            notification_service=notification_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_notification_use_case(
        self, notification_service: NotificationService
    ) -> DeleteNotificationUseCase:
        """Provide delete notification use case."""
        return DeleteNotificationUseCase(notification_service=notification_service)

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_get_profile_use_case(
        self, profile_service: ProfileService, friendship_service: FriendshipService
    ) -> GetProfileUseCase:
        """Provide get profile use case."""
        return GetProfileUseCase(
            profile_service=profile_service, friendship_service=friendship_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, profile_service: ProfileService, session_context: SessionContext
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(
            profile_service=profile_service, session_context=session_context
        )

    @provide(scope=Scope.REQUEST)
    def get_change_username_use_case(
        self, profile_service: ProfileService, session_context: SessionContext
    ) -> ChangeUsernameUseCase:
        """Provide change username use case."""
        return ChangeUsernameUseCase(
            profile_service=profile_service, session_context=session_context
        )

    @provide(scope=Scope.REQUEST)
    def get_upload_profile_image_use_case(
        self, profile_service: ProfileService, session_context: SessionContext
    ) -> UploadProfileImageUseCase:
        """Provide profile image upload use case."""
        return UploadProfileImageUseCase(
            profile_service=profile_service, session_context=session_context
        )

    @provide(scope=Scope.REQUEST)
    def get_search_users_use_case(
        self,
        profile_service: ProfileService,
        notification_settings: NotificationSettings,
    ) -> SearchUsersUseCase:
        """Provide user search use case."""
        return SearchUsersUseCase(
            profile_service=profile_service,
            notification_settings=notification_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_users_use_case(self, profile_service: ProfileService) -> ListUsersUseCase:
        """Provide admin list users use case."""
        return ListUsersUseCase(profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_set_admin_use_case(self, profile_service: ProfileService) -> SetAdminUseCase:
        """Provide admin role use case."""
        return SetAdminUseCase(profile_service=profile_service)

    # Friendship use cases
    @provide(scope=Scope.REQUEST)
    def get_friendship_status_use_case(
        self, friendship_service: FriendshipService
    ) -> GetFriendshipStatusUseCase:
        """Provide friendship status use case."""
        return GetFriendshipStatusUseCase(friendship_service=friendship_service)

    @provide(scope=Scope.REQUEST)
    def get_send_friend_request_use_case(
        self, friendship_service: FriendshipService, profile_service: ProfileService
    ) -> SendFriendRequestUseCase:
        """Provide send friend request use case."""
        return SendFriendRequestUseCase(
            friendship_service=friendship_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_accept_friend_request_use_case(
        self,
        friendship_service: FriendshipService,
        notification_service: NotificationService,
    ) -> AcceptFriendRequestUseCase:
        """Provide accept friend request use case."""
        return AcceptFriendRequestUseCase(
            friendship_service=friendship_service,
            notification_service=notification_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_friendship_use_case(
        self, friendship_service: FriendshipService
    ) -> RemoveFriendshipUseCase:
        """Provide remove friendship use case."""
        return RemoveFriendshipUseCase(friendship_service=friendship_service)

    @provide(scope=Scope.REQUEST)
    def get_list_friends_use_case(
        self, friendship_service: FriendshipService, profile_service: ProfileService
    ) -> ListFriendsUseCase:
        """Provide list friends use case."""
        return ListFriendsUseCase(
            friendship_service=friendship_service, profile_service=profile_service
        )

    # Push use cases
    @provide(scope=Scope.REQUEST)
    def get_deliver_push_use_case(
        self, push_delivery_service: PushDeliveryService
    ) -> DeliverPushUseCase:
        """Provide push delivery use case."""
        return DeliverPushUseCase(push_delivery_service=push_delivery_service)

    @provide(scope=Scope.REQUEST)
    def get_subscribe_push_use_case(
        self, push_delivery_service: PushDeliveryService
    ) -> SubscribePushUseCase:
        """Provide push subscribe use case."""
        return SubscribePushUseCase(push_delivery_service=push_delivery_service)

    @provide(scope=Scope.REQUEST)
    def get_unsubscribe_push_use_case(
        self, push_delivery_service: PushDeliveryService
    ) -> UnsubscribePushUseCase:
        """Provide push unsubscribe use case."""
        return UnsubscribePushUseCase(push_delivery_service=push_delivery_service)

    @provide(scope=Scope.REQUEST)
    def get_vapid_key_use_case(self, push_settings: PushSettings) -> GetVapidKeyUseCase:
        """Provide VAPID key use case."""
        return GetVapidKeyUseCase(push_settings=push_settings)

    # Gallery use cases
    @provide(scope=Scope.REQUEST)
    def get_list_gallery_items_use_case(
        self, gallery_service: GalleryService
    ) -> ListGalleryItemsUseCase:
        """Provide gallery listing use case."""
        return ListGalleryItemsUseCase(gallery_service=gallery_service)

    @provide(scope=Scope.REQUEST)
    def get_deep_fetch_gallery_items_use_case(
        self, gallery_service: GalleryService
    ) -> DeepFetchGalleryItemsUseCase:
        """Provide gallery deep fetch use case."""
        return DeepFetchGalleryItemsUseCase(gallery_service=gallery_service)
