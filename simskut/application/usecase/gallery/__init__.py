"""Gallery use cases."""

from .gallery_items import (
    DeepFetchGalleryItemsUseCase,
    DeepFetchRequest,
    GalleryItemsResponse,
    ListGalleryItemsUseCase,
)

__all__ = [
    "DeepFetchGalleryItemsUseCase",
    "DeepFetchRequest",
    "GalleryItemsResponse",
    "ListGalleryItemsUseCase",
]
