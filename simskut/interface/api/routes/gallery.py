"""Gallery import routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from simskut.application.usecase.auth import GetCurrentUserUseCase
from simskut.application.usecase.gallery import (
    DeepFetchGalleryItemsUseCase,
    DeepFetchRequest,
    GalleryItemsResponse,
    ListGalleryItemsUseCase,
)
from simskut.interface.api.auth import require_member

router = APIRouter(prefix="/gallery", tags=["gallery"], route_class=DishkaRoute)


@router.post("/deep-fetch", response_model=GalleryItemsResponse)
async def deep_fetch(
    request: DeepFetchRequest,
    deep_fetch_gallery_items_use_case: FromDishka[DeepFetchGalleryItemsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GalleryItemsResponse:
    """Full details for the selected uploads.

    Example:
        POST /gallery/deep-fetch
        {"eaId": "SimmerOne", "itemIds": ["0x1A", "0x2B"]}
    """
    await require_member(auth_token, get_current_user_use_case, "import from the gallery")
    return await deep_fetch_gallery_items_use_case.execute(request)


@router.get("/{ea_id}", response_model=GalleryItemsResponse)
async def list_items(
    ea_id: str,
    list_gallery_items_use_case: FromDishka[ListGalleryItemsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GalleryItemsResponse:
    """Public uploads of a gallery account."""
    await require_member(auth_token, get_current_user_use_case, "import from the gallery")
    return await list_gallery_items_use_case.execute(ea_id)
