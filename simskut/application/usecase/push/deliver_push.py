"""Push delivery webhook use case."""

import logfire
from pydantic import BaseModel

from simskut.domain.error import ValidationError
from simskut.domain.service import NotificationRecord, PushDeliveryService


class NotificationWebhookPayload(BaseModel):
    """Database webhook body for a row change."""

    type: str
    table: str
    schema_name: str | None = None
    record: dict | None = None

    @classmethod
    def from_body(cls, body: dict) -> "NotificationWebhookPayload":
        """Parse the raw webhook body ("schema" clashes with BaseModel)."""
        return cls(
            type=str(body.get("type", "")),
            table=str(body.get("table", "")),
            schema_name=body.get("schema"),
            record=body.get("record"),
        )

    @property
    def is_notification_insert(self) -> bool:
        """Whether this is an insert into public.notifications."""
        return (
            self.type == "INSERT"
            and self.table == "notifications"
            and self.schema_name == "public"
        )


class DeliverPushResponse(BaseModel):
    """Webhook acknowledgement."""

    ok: bool = True
    sent: int = 0
    failed: int = 0
    skipped: str | None = None
    errors: list[str] = []


class DeliverPushUseCase:
    """Use case invoked for every inserted notification."""

    def __init__(self, push_delivery_service: PushDeliveryService) -> None:
        """Initialize deliver push use case.

        Args:
            push_delivery_service: Push delivery domain service
        """
        self.push_delivery_service = push_delivery_service

    async def execute(self, payload: NotificationWebhookPayload) -> DeliverPushResponse:
        """Push the notification to the recipient's devices.

        Other row changes are acknowledged and skipped.

        Raises:
            ValidationError: If the notification record is malformed
        """
        if not payload.is_notification_insert:
            logfire.info(
                "Push webhook skipped", type=payload.type, table=payload.table
            )
            return DeliverPushResponse(skipped="not a notification insert")

        try:
            record = NotificationRecord.model_validate(payload.record or {})
        except ValueError as e:
            raise ValidationError(f"Invalid notification record: {e}")

        report = await self.push_delivery_service.deliver(record)
        return DeliverPushResponse(
            sent=report.sent,
            failed=len(report.failures),
            errors=[f.error for f in report.failures],
        )
