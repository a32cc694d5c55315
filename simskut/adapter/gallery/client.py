"""Gallery proxy client."""

from typing import Any

import httpx
import logfire

from simskut.adapter.error import GalleryProxyError
from simskut.config import GallerySettings
from simskut.domain.service.gallery import GalleryItem, GalleryProxy


def _to_int(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _parse_item(raw: dict) -> GalleryItem | None:
    """Normalize one proxy item; items without an id are dropped."""
    item_id = raw.get("ea_original_id") or raw.get("id")
    if not item_id:
        return None
    return GalleryItem(
        ea_original_id=str(item_id),
        title=raw.get("title") or "Untitled",
        thumbnail_url=raw.get("thumbnail_url"),
        packs_needed=raw.get("packs_needed"),
        original_comments=raw.get("original_comments"),
        download_count=_to_int(raw.get("download_count")),
        favorite_count=_to_int(raw.get("favorite_count")),
    )


class GalleryProxyClient(GalleryProxy):
    """HTTP client for the gallery proxy function."""

    def __init__(self, settings: GallerySettings) -> None:
        """Initialize gallery proxy client.

        Args:
            settings: Proxy URL, credential and timeout
        """
        self.proxy_url = settings.proxy_url.rstrip("/")
        self.api_key = settings.api_key
        self.timeout = settings.request_timeout_seconds

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _parse_items(self, response: httpx.Response) -> list[GalleryItem]:
        if response.status_code != 200:
            logfire.error(
                "Gallery proxy request failed",
                status_code=response.status_code,
                response=response.text,
            )
            raise GalleryProxyError(
                f"Gallery proxy returned {response.status_code}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except ValueError as e:
            raise GalleryProxyError(f"Gallery proxy returned invalid JSON: {e}")
        raw_items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(raw_items, list):
            return []
        items = [_parse_item(raw) for raw in raw_items if isinstance(raw, dict)]
        return [item for item in items if item is not None]

    async def list_items(self, ea_id: str) -> list[GalleryItem]:
        """GET {proxy}?eaId=... -> {"items": [...]}."""
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.proxy_url,
                    params={"eaId": ea_id},
                    headers=self._headers(),
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Gallery proxy HTTP error", ea_id=ea_id, error=str(e))
            raise GalleryProxyError(f"Gallery proxy unreachable: {e}")
        return self._parse_items(response)

    async def deep_fetch(self, ea_id: str, item_ids: list[str]) -> list[GalleryItem]:
        """POST {proxy}/deep-fetch {"eaId", "itemIds"} -> {"items": [...]}."""
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.proxy_url}/deep-fetch",
                    json={"eaId": ea_id, "itemIds": item_ids},
                    headers=self._headers(),
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Gallery proxy HTTP error", ea_id=ea_id, error=str(e))
            raise GalleryProxyError(f"Gallery proxy unreachable: {e}")
        return self._parse_items(response)


class MockGalleryProxy(GalleryProxy):
    """Mock gallery proxy for testing.

    Returns a fixed catalogue per account and records deep-fetch requests.
    """

    def __init__(self, catalogue: dict[str, list[GalleryItem]] | None = None) -> None:
        self.catalogue = catalogue or {}
        self.deep_fetch_calls: list[tuple[str, list[str]]] = []

    async def list_items(self, ea_id: str) -> list[GalleryItem]:
        return list(self.catalogue.get(ea_id, []))

    async def deep_fetch(self, ea_id: str, item_ids: list[str]) -> list[GalleryItem]:
        self.deep_fetch_calls.append((ea_id, list(item_ids)))
        wanted = set(item_ids)
        return [i for i in self.catalogue.get(ea_id, []) if i.ea_original_id in wanted]
