"""Mock providers for testing."""

from .auth import MockAuthGatewayProvider
from .gallery import MockGalleryProvider
from .persistence import MockPersistenceProvider
from .push import MockPushProvider
from .realtime import MockRealtimeProvider
from .storage import MockStorageProvider
from .container import build_test_container

__all__ = [
    "MockAuthGatewayProvider",
    "MockGalleryProvider",
    "MockPersistenceProvider",
    "MockPushProvider",
    "MockRealtimeProvider",
    "MockStorageProvider",
    "build_test_container",
]
