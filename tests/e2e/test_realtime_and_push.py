"""End-to-end tests for the feed WebSocket and the push webhook."""

from uuid import uuid4

import pytest
from starlette.websockets import WebSocketDisconnect

from simskut.adapter.webpush.sender import RecordingPushSender
from tests.conftest import seed_user
from tests.harness import create_client_fixture

client = create_client_fixture()


def _use_token(client, token: str) -> None:
    client.cookies.clear()
    client.cookies.set("auth_token", token)


class TestFeedSocket:
    """Tests for /ws/feed."""

    def test_rejects_anonymous(self, client):
        """Without a session the socket closes with 4401."""
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/ws/feed"):
                pass

        assert exc_info.value.code == 4401

    def test_rejects_unapproved(self, client):
        """Users still waiting for approval are refused with 4403."""
        _, token = client.portal.call(
            seed_user, client.container, "bella", False, False
        )
        _use_token(client, token)

        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect("/ws/feed"):
                pass

        assert exc_info.value.code == 4403

    def test_other_posts_are_staged_until_merge(self, client):
        """New posts by others are counted, then shown on merge."""
        # Arrange
        _, reader_token = client.portal.call(seed_user, client.container, "leitora")
        _, writer_token = client.portal.call(seed_user, client.container, "autora")
        _use_token(client, reader_token)

        with client.websocket_connect("/ws/feed") as socket:
            initial = socket.receive_json()
            pending = socket.receive_json()

            # Act - someone else posts
            _use_token(client, writer_token)
            client.post("/posts", json={"content": "Chegou a atualização!"})
            staged = socket.receive_json()
            socket.send_json({"type": "merge"})
            after_merge = socket.receive_json()
            merged = socket.receive_json()
            socket.send_json({"type": "dance"})
            error = socket.receive_json()

        # Assert
        assert initial == {"type": "posts", "posts": [], "has_more": False}
        assert pending == {"type": "pending", "count": 0}
        assert staged == {"type": "pending", "count": 1}
        assert merged["type"] == "merged"
        assert [p["content"] for p in merged["posts"]] == ["Chegou a atualização!"]
        assert merged["posts"][0]["author"]["username"] == "autora"
        assert after_merge == {"type": "pending", "count": 0}
        assert error["type"] == "error"


class TestPushWebhook:
    """Tests for /hooks/send-push."""

    def test_notification_insert_is_pushed(self, client):
        """A notification insert reaches every device of its recipient."""
        # Arrange
        profile, token = client.portal.call(seed_user, client.container, "bella")
        _use_token(client, token)
        subscribed = client.post(
            "/push/subscribe",
            json={
                "endpoint": "https://push.example/device-1",
                "keys": {"p256dh": "p256dh-key", "auth": "auth-secret"},
            },
        )
        sender = client.portal.call(client.container.get, RecordingPushSender)

        # Act
        response = client.post(
            "/hooks/send-push",
            json={
                "type": "INSERT",
                "table": "notifications",
                "schema": "public",
                "record": {
                    "id": str(uuid4()),
                    "user_id": str(profile.id),
                    "type": "friend_accept",
                    "content": None,
                    "reference_id": str(uuid4()),
                },
            },
        )

        # Assert
        assert subscribed.status_code == 201
        assert response.status_code == 200
        assert response.json()["sent"] == 1
        [(endpoint, message)] = sender.sent
        assert endpoint == "https://push.example/device-1"
        assert message.title == "Pedido de amizade aceito"

    def test_other_changes_are_skipped(self, client):
        """Updates and other tables are acknowledged without sending."""
        response = client.post(
            "/hooks/send-push",
            json={"type": "UPDATE", "table": "notifications", "schema": "public"},
        )

        assert response.status_code == 200
        assert response.json()["skipped"] == "not a notification insert"

    def test_non_object_body(self, client):
        """A JSON array body is rejected."""
        response = client.post("/hooks/send-push", json=[1, 2, 3])

        assert response.status_code == 400

    def test_bad_record(self, client):
        """A notification insert without a recipient is a 400."""
        response = client.post(
            "/hooks/send-push",
            json={
                "type": "INSERT",
                "table": "notifications",
                "schema": "public",
                "record": {"type": "like_post"},
            },
        )

        assert response.status_code == 400
