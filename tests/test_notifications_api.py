"""Integration tests for the notification HTTP endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from bcet_connect.application.use_cases.notifications import create_notification
from bcet_connect.infrastructure.security import create_access_token


@pytest.fixture()
def seed(session):
    """Create ``count`` notifications for ``user`` without pushing them."""

    def factory(user, count: int = 1):
        return [
            create_notification(session, None, user_id=user.id, title=f"Notice {index}")
            for index in range(count)
        ]

    return factory


def test_requires_authentication(client: TestClient) -> None:
    response = client.get("/notifications/")

    assert response.status_code == 401
    assert response.json()["code"] == "unauthenticated"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_rejects_garbage_token(client: TestClient) -> None:
    response = client.get(
        "/notifications/unread-count", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401


@pytest.mark.parametrize(
    "claims",
    [{"sub": "abc"}, {"sub": "0"}, {"sub": "-3"}, {"role": "student"}],
    ids=["non-numeric", "zero", "negative", "missing"],
)
def test_rejects_tokens_without_a_valid_subject(client: TestClient, claims) -> None:
    token = create_access_token(claims)

    response = client.get(
        "/notifications/unread-count", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["code"] == "unauthenticated"


def test_list_paginates_newest_first(client, make_user, auth_headers, seed) -> None:
    user = make_user()
    created = seed(user, 3)
    headers = auth_headers(user)

    first = client.get("/notifications/", params={"page": 1, "limit": 2}, headers=headers)
    second = client.get("/notifications/", params={"page": 2, "limit": 2}, headers=headers)

    assert first.status_code == 200
    body = first.json()
    assert body["total"] == 3
    assert body["limit"] == 2
    assert body["unread_count"] == 3
    ids = [item["id"] for item in body["items"]] + [item["id"] for item in second.json()["items"]]
    assert ids == [item.id for item in reversed(created)]


def test_limit_above_maximum_is_capped(client, make_user, auth_headers, seed) -> None:
    user = make_user()
    seed(user)

    response = client.get("/notifications/", params={"limit": 500}, headers=auth_headers(user))

    assert response.status_code == 200
    assert response.json()["limit"] == 100


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "abc"}])
def test_out_of_range_pagination_is_bad_request(client, make_user, auth_headers, params) -> None:
    user = make_user()

    response = client.get("/notifications/", params=params, headers=auth_headers(user))

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_argument"


def test_read_flow_updates_unread_count(client, make_user, auth_headers, seed) -> None:
    user = make_user()
    first, _, _ = seed(user, 3)
    headers = auth_headers(user)

    assert client.get("/notifications/unread-count", headers=headers).json() == {"unread_count": 3}

    read = client.post(f"/notifications/{first.id}/mark-read", headers=headers)
    assert read.status_code == 200
    assert read.json()["is_read"] is True
    read_at = read.json()["read_at"]

    again = client.post(f"/notifications/{first.id}/mark-read", headers=headers)
    assert again.json()["read_at"] == read_at
    assert client.get("/notifications/unread-count", headers=headers).json() == {"unread_count": 2}

    all_read = client.post("/notifications/mark-all-read", headers=headers)
    assert all_read.json() == {"modified": 2}
    assert client.get("/notifications/unread-count", headers=headers).json() == {"unread_count": 0}

    unread_only = client.get("/notifications/", params={"only_unread": True}, headers=headers)
    assert unread_only.json()["items"] == []


def test_other_users_notification_is_not_found(client, make_user, auth_headers, seed) -> None:
    owner, intruder = make_user(), make_user()
    [notification] = seed(owner)

    for method, path in (
        ("post", f"/notifications/{notification.id}/mark-read"),
        ("post", f"/notifications/{notification.id}/dismiss"),
        ("delete", f"/notifications/{notification.id}"),
    ):
        response = client.request(method, path, headers=auth_headers(intruder))
        assert response.status_code == 404, path

    assert client.get("/notifications/unread-count", headers=auth_headers(owner)).json() == {
        "unread_count": 1
    }


@pytest.mark.parametrize("notification_id", ["0", "-3", "abc"])
def test_malformed_ids_are_bad_request(client, make_user, auth_headers, notification_id) -> None:
    user = make_user()

    response = client.post(
        f"/notifications/{notification_id}/mark-read", headers=auth_headers(user)
    )

    assert response.status_code == 400


def test_dismiss_and_delete(client, make_user, auth_headers, seed) -> None:
    user = make_user()
    dismissed, deleted, kept = seed(user, 3)
    headers = auth_headers(user)

    assert client.post(f"/notifications/{dismissed.id}/dismiss", headers=headers).json()[
        "dismissed"
    ] is True
    assert client.delete(f"/notifications/{deleted.id}", headers=headers).status_code == 204

    listed = client.get("/notifications/", headers=headers).json()
    assert {item["id"] for item in listed["items"]} == {kept.id, dismissed.id}
    assert listed["unread_count"] == 2
    assert client.get("/notifications/unread-count", headers=headers).json() == {
        "unread_count": 2
    }
    without_dismissed = client.get(
        "/notifications/", params={"hide_dismissed": True}, headers=headers
    ).json()
    assert [item["id"] for item in without_dismissed["items"]] == [kept.id]


def test_broadcast_requires_admin(client, make_user, auth_headers) -> None:
    student = make_user()

    response = client.post(
        "/notifications/broadcast", json={"title": "Hi"}, headers=auth_headers(student)
    )

    assert response.status_code == 403


def test_broadcast_persists_for_every_active_user(client, make_user, admin, auth_headers) -> None:
    first, second = make_user(), make_user()
    make_user(is_active=False)

    response = client.post(
        "/notifications/broadcast",
        json={"title": "Library closed", "message": "Back tomorrow"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 201
    assert response.json() == {"recipients": 2, "persisted": True}
    for user in (first, second):
        listed = client.get("/notifications/", headers=auth_headers(user)).json()
        assert listed["items"][0]["priority"] == "high"
        assert listed["items"][0]["category"] == "broadcast"


def test_role_broadcast_is_live_only(client, make_user, admin, auth_headers) -> None:
    student = make_user()

    response = client.post(
        "/notifications/broadcast",
        json={"title": "Lab open", "role": "student"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 201
    assert response.json() == {"recipients": 0, "persisted": False}
    assert client.get("/notifications/unread-count", headers=auth_headers(student)).json() == {
        "unread_count": 0
    }


def test_broadcast_takes_a_role_or_a_topic_not_both(client, admin, auth_headers) -> None:
    response = client.post(
        "/notifications/broadcast",
        json={"title": "Mixed", "role": "student", "topic": "placements"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 400
