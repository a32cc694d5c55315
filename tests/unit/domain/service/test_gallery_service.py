"""Unit tests for GalleryService."""

import pytest

from simskut.adapter.gallery.client import MockGalleryProxy
from simskut.config import GallerySettings
from simskut.domain.error import ValidationError
from simskut.domain.service import GalleryItem, GalleryService


def _service(proxy: MockGalleryProxy, limit: int = 50) -> GalleryService:
    return GalleryService(proxy, GallerySettings(deep_fetch_limit=limit))


class TestGalleryService:
    """Tests for listing and deep-fetching gallery uploads."""

    @pytest.mark.asyncio
    async def test_list_items(self):
        """Items of the account are returned as served by the proxy."""
        proxy = MockGalleryProxy({"simmer42": [GalleryItem(ea_original_id="1", title="Casa")]})

        items = await _service(proxy).list_items("  simmer42 ")

        assert [i.title for i in items] == ["Casa"]

    @pytest.mark.asyncio
    async def test_blank_account_rejected(self):
        """A blank account id fails validation."""
        with pytest.raises(ValidationError):
            await _service(MockGalleryProxy()).list_items("   ")

    @pytest.mark.asyncio
    async def test_deep_fetch_dedups_and_caps(self):
        """Ids are de-duplicated in order and capped at the limit."""
        # Arrange
        proxy = MockGalleryProxy()
        ids = ["a", "b", "a", "", "c", "d"]

        # Act
        await _service(proxy, limit=3).deep_fetch("simmer42", ids)

        # Assert
        assert proxy.deep_fetch_calls == [("simmer42", ["a", "b", "c"])]

    @pytest.mark.asyncio
    async def test_deep_fetch_without_ids_skips_proxy(self):
        """No ids means no proxy call."""
        proxy = MockGalleryProxy()

        assert await _service(proxy).deep_fetch("simmer42", ["", ""]) == []
        assert proxy.deep_fetch_calls == []
