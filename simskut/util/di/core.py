"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from simskut.config import (
    AuthSettings,
    FeedSettings,
    GallerySettings,
    InvitationSettings,
    NotificationSettings,
    PushSettings,
    Settings,
    StorageSettings,
)
from simskut.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation settings."""
        return settings.invitations

    @provide
    def provide_feed_settings(self, settings: Settings) -> FeedSettings:
        """Provide feed settings."""
        return settings.feed

    @provide
    def provide_notification_settings(self, settings: Settings) -> NotificationSettings:
        """Provide notification settings."""
        return settings.notifications

    @provide
    def provide_push_settings(self, settings: Settings) -> PushSettings:
        """Provide web push settings."""
        return settings.push

    @provide
    def provide_gallery_settings(self, settings: Settings) -> GallerySettings:
        """Provide gallery proxy settings."""
        return settings.gallery

    @provide
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        """Provide object storage settings."""
        return settings.storage
