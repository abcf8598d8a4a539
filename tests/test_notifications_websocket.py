"""Tests for the realtime notifications websocket."""

from __future__ import annotations

import time

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from bcet_connect.application.use_cases.notifications import create_notification
from bcet_connect.infrastructure.security import create_access_token, create_user_token


def _ws_url(user) -> str:
    return f"/notifications/ws?token={create_user_token(user.id, user.role)}"


def _receive_until(websocket, message_type: str, limit: int = 5) -> dict:
    for _ in range(limit):
        message = websocket.receive_json()
        if message["type"] == message_type:
            return message
    raise AssertionError(f"no {message_type} message received")


def test_connection_without_token_is_rejected(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect("/notifications/ws"):
            pass

    assert excinfo.value.code == 1008


def test_connection_for_inactive_user_is_rejected(client: TestClient, make_user) -> None:
    ghost = make_user(is_active=False)

    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(_ws_url(ghost)):
            pass


@pytest.mark.parametrize(
    "claims",
    [{"sub": "abc"}, {"sub": "0"}, {"sub": "-3"}, {"role": "student"}],
    ids=["non-numeric", "zero", "negative", "missing"],
)
def test_connection_with_invalid_subject_is_rejected(client: TestClient, claims) -> None:
    token = create_access_token(claims)

    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect(f"/notifications/ws?token={token}"):
            pass

    assert excinfo.value.code == 1008
    assert client.app.state.delivery_registry.connection_count() == 0


def test_connect_reports_unread_count_and_answers_ping(
    client: TestClient, session, make_user
) -> None:
    user = make_user()
    create_notification(session, None, user_id=user.id, title="Welcome")

    with client.websocket_connect(_ws_url(user)) as websocket:
        connected = websocket.receive_json()
        assert connected == {
            "type": "notifications:connected",
            "data": {"user_id": user.id, "unread_count": 1},
        }
        registry = client.app.state.delivery_registry
        assert registry.connection_count(user.id) == 1

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}


def test_bearer_header_is_accepted(client: TestClient, make_user) -> None:
    user = make_user()
    headers = {"Authorization": f"Bearer {create_user_token(user.id, user.role)}"}

    with client.websocket_connect("/notifications/ws", headers=headers) as websocket:
        assert websocket.receive_json()["type"] == "notifications:connected"


def test_new_notifications_are_pushed_live(
    client: TestClient, make_user, auth_headers
) -> None:
    author, fan = make_user(), make_user()
    post = client.post(
        "/feed/", json={"text": "live", "visibility": "public"}, headers=auth_headers(author)
    ).json()

    with client.websocket_connect(_ws_url(author)) as websocket:
        websocket.receive_json()
        client.post(f"/feed/{post['id']}/like", headers=auth_headers(fan))

        pushed = _receive_until(websocket, "notification:new")

    assert pushed["data"]["category"] == "reaction"
    assert pushed["data"]["payload"] == {"post_id": post["id"]}
    assert pushed["data"]["user_id"] == author.id


def test_mark_read_over_the_socket(client: TestClient, session, make_user) -> None:
    user = make_user()
    notification = create_notification(session, None, user_id=user.id, title="Hi")

    with client.websocket_connect(_ws_url(user)) as websocket:
        websocket.receive_json()
        websocket.send_json({"type": "notifications:mark-read", "id": notification.id})
        first, second = websocket.receive_json(), websocket.receive_json()
        received = {message["type"]: message for message in (first, second)}
        ack, read_event = received["ack"], received["notification:read"]

        websocket.send_json({"type": "notifications:mark-read", "id": 999_999})
        failed = _receive_until(websocket, "ack")

    assert ack["success"] is True
    assert ack["data"]["is_read"] is True
    assert read_event["data"] == {"id": notification.id, "unread_count": 0}
    assert failed["success"] is False


def test_mark_all_read_over_the_socket(client: TestClient, session, make_user) -> None:
    user = make_user()
    for index in range(2):
        create_notification(session, None, user_id=user.id, title=f"n{index}")

    with client.websocket_connect(_ws_url(user)) as websocket:
        websocket.receive_json()
        websocket.send_json({"type": "notifications:mark-all-read"})
        ack = _receive_until(websocket, "ack")

    assert ack["data"] == {"modified": 2}


def test_disconnect_unregisters_channel(client: TestClient, make_user) -> None:
    user = make_user()

    with client.websocket_connect(_ws_url(user)) as websocket:
        websocket.receive_json()

    registry = client.app.state.delivery_registry
    # The handler unregisters on the app loop after the client has gone.
    for _ in range(50):
        if registry.connection_count(user.id) == 0:
            break
        time.sleep(0.02)
    assert registry.connection_count(user.id) == 0


def test_subscribed_channels_receive_topic_broadcasts(
    client: TestClient, make_user, admin, auth_headers
) -> None:
    listener, bystander = make_user(), make_user()

    with client.websocket_connect(_ws_url(listener)) as websocket, client.websocket_connect(
        _ws_url(bystander)
    ) as other:
        websocket.receive_json()
        other.receive_json()
        websocket.send_json(
            {"type": "notifications:subscribe", "channels": [" placements ", "", 7]}
        )
        ack = _receive_until(websocket, "ack")

        response = client.post(
            "/notifications/broadcast",
            json={"title": "Drive on Monday", "topic": "placements"},
            headers=auth_headers(admin),
        )
        pushed = _receive_until(websocket, "notification:broadcast")
        other.send_json({"type": "ping"})
        assert other.receive_json() == {"type": "pong"}

    assert ack == {
        "type": "ack",
        "event": "notifications:subscribe",
        "success": True,
        "data": {"channels": ["placements"]},
    }
    assert response.json() == {"recipients": 1, "persisted": False}
    assert pushed["data"]["topic"] == "placements"
    assert pushed["data"]["title"] == "Drive on Monday"


def test_subscribe_without_channel_list_is_refused(client: TestClient, make_user) -> None:
    user = make_user()

    with client.websocket_connect(_ws_url(user)) as websocket:
        websocket.receive_json()
        websocket.send_json({"type": "notifications:subscribe", "channels": "placements"})
        ack = _receive_until(websocket, "ack")

    assert ack["success"] is False
    assert ack["error"] == "channels required"
    assert client.app.state.delivery_registry.connection_count(topic="placements") == 0


def test_binary_and_malformed_frames_are_ignored(client: TestClient, make_user) -> None:
    user = make_user()

    with client.websocket_connect(_ws_url(user)) as websocket:
        websocket.receive_json()
        websocket.send_bytes(b"\x00\x01")
        websocket.send_text("{not json")
        websocket.send_json(["not", "an", "object"])
        websocket.send_json({"type": "ping"})

        assert websocket.receive_json() == {"type": "pong"}
        assert client.app.state.delivery_registry.connection_count(user.id) == 1
