"""Object storage over the hosted storage REST API."""

import httpx
import logfire

from simskut.adapter.error import StorageError
from simskut.config import StorageSettings
from simskut.domain.service.storage import ObjectStorage


class SupabaseStorageClient(ObjectStorage):
    """Bucket-scoped storage client."""

    def __init__(self, settings: StorageSettings) -> None:
        """Initialize storage client.

        Args:
            settings: Storage URL, service key and bucket
        """
        self.base_url = settings.url.rstrip("/")
        self.service_key = settings.service_key
        self.bucket = settings.bucket

    async def upload(
        self, path: str, data: bytes, content_type: str, upsert: bool = True
    ) -> str:
        """Upload bytes to `path` in the bucket.

        Raises:
            StorageError: If the upload fails
        """
        url = f"{self.base_url}/object/{self.bucket}/{path}"
        headers = {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
            "Content-Type": content_type,
            "x-upsert": "true" if upsert else "false",
        }
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(url, content=data, headers=headers, timeout=30.0)
        except httpx.HTTPError as e:
            logfire.error("Storage upload HTTP error", path=path, error=str(e))
            raise StorageError(f"Storage unreachable: {e}")

        if response.status_code not in (200, 201):
            logfire.error(
                "Storage upload failed",
                path=path,
                status_code=response.status_code,
                response=response.text,
            )
            raise StorageError(
                f"Upload failed: {response.text}", status_code=response.status_code
            )

        logfire.info("Object uploaded", path=path, size=len(data))
        return path

    def public_url(self, path: str) -> str:
        """Public URL of an object in the bucket."""
        return f"{self.base_url}/object/public/{self.bucket}/{path}"


class InMemoryStorage(ObjectStorage):
    """Mock object storage for testing."""

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}

    async def upload(
        self, path: str, data: bytes, content_type: str, upsert: bool = True
    ) -> str:
        if not upsert and path in self.objects:
            raise StorageError("The resource already exists", status_code=409)
        self.objects[path] = (data, content_type)
        return path

    def public_url(self, path: str) -> str:
        return f"https://storage.mock/object/public/avatars/{path}"
