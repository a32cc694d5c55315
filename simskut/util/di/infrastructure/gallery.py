"""Gallery proxy infrastructure providers."""

from dishka import Scope, provide

from simskut.adapter.gallery.client import GalleryProxyClient
from simskut.config import GallerySettings
from simskut.domain.service import GalleryProxy
from simskut.util.di.base import ProviderBase


class GalleryProvider(ProviderBase):
    """Gallery proxy component base."""

    __mock_component__ = "gallery"


class ProdGalleryProvider(GalleryProvider):
    """Production gallery proxy client."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_gallery_proxy(self, gallery_settings: GallerySettings) -> GalleryProxy:
        """Provide gallery proxy client."""
        return GalleryProxyClient(settings=gallery_settings)
