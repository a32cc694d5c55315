"""Gallery import: items shared on the game's public gallery."""

from abc import ABC, abstractmethod
from typing import Any

import logfire

from simskut.config import GallerySettings
from simskut.domain.error import ValidationError
from simskut.domain.value.common import ValueObject

from .base import Service


class GalleryItem(ValueObject):
    """One gallery upload (lot, room or household) as seen through the proxy."""

    ea_original_id: str
    title: str
    thumbnail_url: str | None = None
    packs_needed: Any = None  # Shape varies per upload
    original_comments: Any = None
    download_count: int | None = None
    favorite_count: int | None = None


class GalleryProxy(ABC):
    """Client for the gallery proxy function."""

    @abstractmethod
    async def list_items(self, ea_id: str) -> list[GalleryItem]:
        """List the public uploads of a gallery account.

        Raises:
            GalleryProxyError: If the proxy request fails
        """
        pass

    @abstractmethod
    async def deep_fetch(self, ea_id: str, item_ids: list[str]) -> list[GalleryItem]:
        """Fetch full details for specific uploads.

        Raises:
            GalleryProxyError: If the proxy request fails
        """
        pass


class GalleryService(Service):
    """Domain service for importing gallery uploads."""

    def __init__(self, gallery_proxy: GalleryProxy, gallery_settings: GallerySettings) -> None:
        """Initialize gallery service.

        Args:
            gallery_proxy: Gallery proxy client
            gallery_settings: Gallery settings
        """
        self.gallery_proxy = gallery_proxy
        self.gallery_settings = gallery_settings

    async def list_items(self, ea_id: str) -> list[GalleryItem]:
        """List a gallery account's uploads.

        Raises:
            ValidationError: If the account id is blank
        """
        ea_id = ea_id.strip()
        if not ea_id:
            raise ValidationError("Gallery account id is required")
        with logfire.span("gallery_service.list_items", ea_id=ea_id):
            items = await self.gallery_proxy.list_items(ea_id)
            logfire.info("Gallery items listed", ea_id=ea_id, count=len(items))
            return items

    async def deep_fetch(self, ea_id: str, item_ids: list[str]) -> list[GalleryItem]:
        """Fetch details for unique item ids, capped at deep_fetch_limit.

        Raises:
            ValidationError: If the account id is blank
        """
        ea_id = ea_id.strip()
        if not ea_id:
            raise ValidationError("Gallery account id is required")

        unique_ids = list(dict.fromkeys(i for i in item_ids if i))
        limit = self.gallery_settings.deep_fetch_limit
        if len(unique_ids) > limit:
            logfire.warn(
                "Deep fetch truncated", requested=len(unique_ids), limit=limit
            )
            unique_ids = unique_ids[:limit]
        if not unique_ids:
            return []

        with logfire.span("gallery_service.deep_fetch", ea_id=ea_id, count=len(unique_ids)):
            return await self.gallery_proxy.deep_fetch(ea_id, unique_ids)
