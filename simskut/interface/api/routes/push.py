"""Web push subscription routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel, Field

from simskut.application.usecase.auth import GetCurrentUserUseCase
from simskut.application.usecase.push import (
    GetVapidKeyUseCase,
    SubscribePushRequest,
    SubscribePushResponse,
    SubscribePushUseCase,
    UnsubscribePushUseCase,
    VapidKeyResponse,
)
from simskut.interface.api.auth import require_user, user_id_of

router = APIRouter(prefix="/push", tags=["push"], route_class=DishkaRoute)


class PushKeys(BaseModel):
    """Keys of a browser PushSubscription."""

    p256dh: str = Field(min_length=1)
    auth: str = Field(min_length=1)


class SubscribePushAPIRequest(BaseModel):
    """The browser's PushSubscription.toJSON() shape."""

    endpoint: str = Field(min_length=1)
    keys: PushKeys


class UnsubscribePushAPIRequest(BaseModel):
    """Endpoint to stop delivering to."""

    endpoint: str = Field(min_length=1)


@router.get("/vapid-key", response_model=VapidKeyResponse)
async def get_vapid_key(
    get_vapid_key_use_case: FromDishka[GetVapidKeyUseCase],
) -> VapidKeyResponse:
    """Public VAPID key for PushManager.subscribe."""
    return await get_vapid_key_use_case.execute()


@router.post(
    "/subscribe",
    response_model=SubscribePushResponse,
    status_code=status.HTTP_201_CREATED,
)
async def subscribe(
    request: SubscribePushAPIRequest,
    subscribe_push_use_case: FromDishka[SubscribePushUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> SubscribePushResponse:
    """Store this device's subscription; re-subscribing refreshes its keys."""
    user = await require_user(auth_token, get_current_user_use_case, "enable push")
    return await subscribe_push_use_case.execute(
        SubscribePushRequest(
            user_id=user_id_of(user),
            endpoint=request.endpoint,
            p256dh=request.keys.p256dh,
            auth=request.keys.auth,
        )
    )


@router.delete("/subscribe", status_code=status.HTTP_204_NO_CONTENT)
async def unsubscribe(
    request: UnsubscribePushAPIRequest,
    unsubscribe_push_use_case: FromDishka[UnsubscribePushUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> Response:
    """Forget this device's subscription. Unknown endpoints are ignored."""
    user = await require_user(auth_token, get_current_user_use_case, "disable push")
    await unsubscribe_push_use_case.execute(user_id_of(user), request.endpoint)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
