"""Unit tests for PushDeliveryService."""

from uuid import uuid4

import pytest

from simskut.adapter.webpush.sender import RecordingPushSender
from simskut.domain.repository import PushSubscriptionRepository
from simskut.domain.service import NotificationRecord, PushDeliveryService
from simskut.domain.value import UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _record(user_id: UserId, **overrides) -> NotificationRecord:
    fields = {
        "id": str(uuid4()),
        "user_id": str(user_id),
        "type": "like_post",
        "content": "Sul sul!",
        "reference_id": "post-1",
    }
    fields.update(overrides)
    return NotificationRecord(**fields)


class TestBuildMessage:
    """Tests for push message rendering."""

    @pytest.mark.asyncio
    async def test_known_type_title(self, unit_env):
        """Known notification types get their own title."""
        service = await unit_env.get(PushDeliveryService)

        message = service.build_message(_record(UserId(uuid4()), type="mention_post"))

        assert message.title == "Você foi mencionado"
        assert message.body == "Sul sul!"
        assert message.to_payload()["data"]["reference_id"] == "post-1"

    @pytest.mark.asyncio
    async def test_unknown_type_and_long_body(self, unit_env):
        """Unknown types fall back to the default title; long bodies are cut."""
        service = await unit_env.get(PushDeliveryService)

        message = service.build_message(
            _record(UserId(uuid4()), type="something_new", content="a" * 100)
        )

        assert message.title == "Nova atividade no SimsKut"
        assert message.body == "a" * 80 + "..."


class TestDeliver:
    """Tests for delivering to every device of a recipient."""

    @pytest.mark.asyncio
    async def test_failures_do_not_stop_other_devices(self, unit_env):
        """A gone endpoint is removed, a failing one kept, the rest delivered."""
        # Arrange
        service = await unit_env.get(PushDeliveryService)
        sender = await unit_env.get(RecordingPushSender)
        repo = await unit_env.get(PushSubscriptionRepository)
        user_id = UserId(uuid4())
        for endpoint in ("https://push/gone", "https://push/flaky", "https://push/ok"):
            await service.subscribe(user_id, endpoint, "p256dh-key", "auth-secret")
        sender.fail("https://push/gone", 410)
        sender.fail("https://push/flaky", 500)

        # Act
        report = await service.deliver(_record(user_id))

        # Assert
        assert report.sent == 1
        assert [endpoint for endpoint, _ in sender.sent] == ["https://push/ok"]
        removed = {f.endpoint: f.removed for f in report.failures}
        assert removed == {"https://push/gone": True, "https://push/flaky": False}
        remaining = {s.endpoint for s in await repo.list_for_user(user_id)}
        assert remaining == {"https://push/flaky", "https://push/ok"}

    @pytest.mark.asyncio
    async def test_no_subscriptions(self, unit_env):
        """A recipient without devices produces an empty report."""
        service = await unit_env.get(PushDeliveryService)

        report = await service.deliver(_record(UserId(uuid4())))

        assert report.sent == 0
        assert report.failures == []

    @pytest.mark.asyncio
    async def test_subscribe_is_upsert(self, unit_env):
        """Subscribing the same endpoint twice keeps one row with fresh keys."""
        # Arrange
        service = await unit_env.get(PushDeliveryService)
        repo = await unit_env.get(PushSubscriptionRepository)
        user_id = UserId(uuid4())

        # Act
        await service.subscribe(user_id, "https://push/1", "old", "old")
        await service.subscribe(user_id, "https://push/1", "new", "new")

        # Assert
        [subscription] = await repo.list_for_user(user_id)
        assert subscription.p256dh == "new"
        assert await service.unsubscribe(user_id, "https://push/1") is True
        assert await repo.list_for_user(user_id) == []
