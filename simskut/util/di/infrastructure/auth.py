"""Auth provider infrastructure providers."""

from dishka import Scope, provide

from simskut.adapter.supabase.auth import SupabaseAuthClient
from simskut.config import AuthSettings
from simskut.domain.service import AuthGateway
from simskut.util.di.base import ProviderBase


class AuthGatewayProvider(ProviderBase):
    """Auth gateway component base."""

    __mock_component__ = "auth"


class ProdAuthGatewayProvider(AuthGatewayProvider):
    """Production auth gateway talking to the hosted auth provider."""

    __is_mock__ = False

    @provide(scope=Scope.REQUEST)
    def get_auth_gateway(self, auth_settings: AuthSettings) -> AuthGateway:
        """Provide one gateway per request; listeners never outlive it."""
        return SupabaseAuthClient(settings=auth_settings.gateway)
