"""Database webhook receivers."""

import hmac
import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Request, status

from simskut.application.usecase.push import (
    DeliverPushResponse,
    DeliverPushUseCase,
    NotificationWebhookPayload,
)
from simskut.config import PushSettings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hooks", tags=["hooks"], route_class=DishkaRoute)


@router.post("/send-push", response_model=DeliverPushResponse)
async def send_push(
    request: Request,
    deliver_push_use_case: FromDishka[DeliverPushUseCase],
    push_settings: FromDishka[PushSettings],
    x_webhook_secret: str | None = Header(default=None),
) -> DeliverPushResponse:
    """Deliver web push for an inserted notification row.

    Payloads for other tables or events are acknowledged and skipped.

    Example:
        POST /hooks/send-push
        {
            "type": "INSERT",
            "table": "notifications",
            "schema": "public",
            "record": {"id": "...", "user_id": "...", "type": "like_post", ...}
        }

        Response:
        {"ok": true, "sent": 2, "failed": 0, "skipped": null, "errors": []}
    """
    expected = push_settings.webhook_secret
    if expected and not hmac.compare_digest(x_webhook_secret or "", expected):
        logger.warning("Rejected push webhook with a bad secret")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid webhook secret"
        )

    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Body must be JSON"
        )
    if not isinstance(body, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Body must be a JSON object"
        )

    return await deliver_push_use_case.execute(NotificationWebhookPayload.from_body(body))
