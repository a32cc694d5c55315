"""Object storage infrastructure providers."""

from dishka import Scope, provide

from simskut.adapter.supabase.storage import SupabaseStorageClient
from simskut.config import StorageSettings
from simskut.domain.service import ObjectStorage
from simskut.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """Object storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production object storage client."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_object_storage(self, storage_settings: StorageSettings) -> ObjectStorage:
        """Provide object storage client."""
        return SupabaseStorageClient(settings=storage_settings)
