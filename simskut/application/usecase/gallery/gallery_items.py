"""Gallery import use cases."""

from pydantic import BaseModel, ConfigDict, Field

from simskut.domain.service import GalleryItem, GalleryService


class GalleryItemsResponse(BaseModel):
    """Gallery uploads returned by the proxy."""

    items: list[GalleryItem]


class ListGalleryItemsUseCase:
    """Use case for discovering a gallery account's uploads."""

    def __init__(self, gallery_service: GalleryService) -> None:
        """Initialize list gallery items use case.

        Args:
            gallery_service: Gallery domain service
        """
        self.gallery_service = gallery_service

    async def execute(self, ea_id: str) -> GalleryItemsResponse:
        """List uploads.

        Raises:
            ValidationError: If the account id is blank
            GalleryProxyError: If the proxy request fails
        """
        items = await self.gallery_service.list_items(ea_id)
        return GalleryItemsResponse(items=items)


class DeepFetchRequest(BaseModel):
    """Selected uploads to fetch in full."""

    model_config = ConfigDict(populate_by_name=True)

    ea_id: str = Field(alias="eaId")
    item_ids: list[str] = Field(alias="itemIds")


class DeepFetchGalleryItemsUseCase:
    """Use case for fetching full details of selected uploads."""

    def __init__(self, gallery_service: GalleryService) -> None:
        """Initialize deep fetch use case.

        Args:
            gallery_service: Gallery domain service
        """
        self.gallery_service = gallery_service

    async def execute(self, request: DeepFetchRequest) -> GalleryItemsResponse:
        """Fetch details for unique ids, capped at the configured limit.

        Raises:
            ValidationError: If the account id is blank
            GalleryProxyError: If the proxy request fails
        """
        items = await self.gallery_service.deep_fetch(request.ea_id, request.item_ids)
        return GalleryItemsResponse(items=items)
