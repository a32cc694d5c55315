"""Mock auth provider for testing."""

from dishka import Scope, provide

from simskut.adapter.supabase.auth import MockAuthDirectory, MockAuthGateway
from simskut.domain.service import AuthGateway
from simskut.util.di.infrastructure.auth import AuthGatewayProvider


class MockAuthGatewayProvider(AuthGatewayProvider):
    """Mock auth gateway provider.

    Accounts live in an APP-scoped directory so sign-up in one request can
    be followed by sign-in in another.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_auth_directory(self) -> MockAuthDirectory:
        """Provide the shared mock account directory."""
        return MockAuthDirectory()

    @provide(scope=Scope.REQUEST)
    def get_auth_gateway(self, directory: MockAuthDirectory) -> AuthGateway:
        """Provide mock auth gateway."""
        return MockAuthGateway(directory)
