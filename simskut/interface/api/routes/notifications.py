"""Notification inbox routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status

from simskut.application.usecase.auth import GetCurrentUserUseCase
from simskut.application.usecase.notification import (
    DeleteNotificationUseCase,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkAllReadResponse,
    MarkNotificationReadUseCase,
)
from simskut.domain.value import NotificationId
from simskut.interface.api.auth import require_member, user_id_of

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ListNotificationsResponse:
    """Latest notifications with actor profiles and the unread count."""
    user = await require_member(
        auth_token, get_current_user_use_case, "view notifications"
    )
    return await list_notifications_use_case.execute(user_id_of(user))


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    mark_all_notifications_read_use_case: FromDishka[MarkAllNotificationsReadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> MarkAllReadResponse:
    """Mark every unread notification as read."""
    user = await require_member(
        auth_token, get_current_user_use_case, "update notifications"
    )
    return await mark_all_notifications_read_use_case.execute(user_id_of(user))


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(
    notification_id: UUID,
    mark_notification_read_use_case: FromDishka[MarkNotificationReadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Mark one notification as read."""
    user = await require_member(
        auth_token, get_current_user_use_case, "update notifications"
    )
    await mark_notification_read_use_case.execute(
        NotificationId(notification_id), user_id_of(user)
    )


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: UUID,
    delete_notification_use_case: FromDishka[DeleteNotificationUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete one notification."""
    user = await require_member(
        auth_token, get_current_user_use_case, "delete notifications"
    )
    await delete_notification_use_case.execute(
        NotificationId(notification_id), user_id_of(user)
    )
