"""Mock object storage provider for testing."""

from dishka import Scope, provide

from simskut.adapter.supabase.storage import InMemoryStorage
from simskut.domain.service import ObjectStorage
from simskut.util.di.infrastructure.storage import StorageProvider


class MockStorageProvider(StorageProvider):
    """Mock storage provider keeping uploads in memory."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_in_memory_storage(self) -> InMemoryStorage:
        """Provide in-memory object storage."""
        return InMemoryStorage()

    @provide(scope=Scope.APP)
    def get_object_storage(self, storage: InMemoryStorage) -> ObjectStorage:
        """Expose the in-memory storage through the domain interface."""
        return storage
