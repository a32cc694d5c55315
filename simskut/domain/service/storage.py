"""Object storage interface used for avatar and banner uploads."""

from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    """Upload-by-path blob storage with public URLs."""

    @abstractmethod
    async def upload(
        self, path: str, data: bytes, content_type: str, upsert: bool = True
    ) -> str:
        """Store `data` at `path`.

        Args:
            path: Object path inside the bucket
            data: Raw bytes
            content_type: MIME type stored with the object
            upsert: Overwrite an existing object at the same path

        Returns:
            The stored path
        """
        pass

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Public URL for an object path."""
        pass
