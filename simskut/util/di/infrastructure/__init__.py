"""Infrastructure providers."""

# Import bases
from .auth import AuthGatewayProvider
from .gallery import GalleryProvider
from .persistence import PersistenceProvider
from .push import PushProvider
from .realtime import RealtimeProvider
from .storage import StorageProvider

# Import implementations (needed for __subclasses__())
from .auth import ProdAuthGatewayProvider  # noqa: F401
from .gallery import ProdGalleryProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .push import ProdPushProvider  # noqa: F401
from .realtime import ProdRealtimeProvider  # noqa: F401
from .storage import ProdStorageProvider  # noqa: F401

__all__ = [
    "AuthGatewayProvider",
    "GalleryProvider",
    "PersistenceProvider",
    "ProdAuthGatewayProvider",
    "ProdGalleryProvider",
    "ProdPersistenceProvider",
    "ProdPushProvider",
    "ProdRealtimeProvider",
    "ProdStorageProvider",
    "PushProvider",
    "RealtimeProvider",
    "StorageProvider",
]
