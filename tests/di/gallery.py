"""Mock gallery proxy provider for testing."""

from dishka import Scope, provide

from simskut.adapter.gallery.client import MockGalleryProxy
from simskut.domain.service import GalleryProxy
from simskut.util.di.infrastructure.gallery import GalleryProvider


class MockGalleryProvider(GalleryProvider):
    """Mock gallery provider serving a fixed catalogue."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mock_gallery_proxy(self) -> MockGalleryProxy:
        """Provide mock gallery proxy with an empty catalogue."""
        return MockGalleryProxy()

    @provide(scope=Scope.APP)
    def get_gallery_proxy(self, proxy: MockGalleryProxy) -> GalleryProxy:
        """Expose the mock proxy through the domain interface."""
        return proxy
