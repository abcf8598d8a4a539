"""Integration tests for the feed, user and community endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from bcet_connect.infrastructure import storage


def _post(client: TestClient, headers, **payload):
    response = client.post("/feed/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_login_issues_a_usable_token(client: TestClient, make_user) -> None:
    user = make_user("ada")

    response = client.post(
        "/auth/token", data={"username": "ADA@bcet.edu", "password": "Secret123"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["role"] == "student"
    me = client.get("/users/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.json()["id"] == user.id


def test_login_rejects_wrong_password_and_inactive_users(client: TestClient, make_user) -> None:
    make_user("grace")
    make_user("ghost", is_active=False)

    wrong = client.post("/auth/token", data={"username": "grace@bcet.edu", "password": "nope"})
    inactive = client.post(
        "/auth/token", data={"username": "ghost@bcet.edu", "password": "Secret123"}
    )

    assert wrong.status_code == 401
    assert inactive.status_code == 403


def test_admin_creates_accounts(client: TestClient, admin, make_user, auth_headers) -> None:
    student = make_user()
    payload = {"name": "New Student", "email": "new@bcet.edu", "password": "Password1"}

    assert client.post("/users/", json=payload, headers=auth_headers(student)).status_code == 403
    created = client.post("/users/", json=payload, headers=auth_headers(admin))

    assert created.status_code == 201
    assert created.json()["role"] == "student"
    duplicate = client.post("/users/", json=payload, headers=auth_headers(admin))
    assert duplicate.status_code == 400


def test_follow_controls_followers_only_posts(client: TestClient, make_user, auth_headers) -> None:
    author, reader = make_user(), make_user()
    post = _post(client, auth_headers(author), text="for my followers")

    assert client.get("/feed/", headers=auth_headers(reader)).json() == []

    followed = client.post(f"/users/{author.id}/follow", headers=auth_headers(reader))
    assert followed.json() == {"following": True, "changed": True}
    assert client.post(f"/users/{author.id}/follow", headers=auth_headers(reader)).json() == {
        "following": True,
        "changed": False,
    }
    assert [item["id"] for item in client.get("/feed/", headers=auth_headers(reader)).json()] == [
        post["id"]
    ]

    client.delete(f"/users/{author.id}/follow", headers=auth_headers(reader))
    assert client.get("/feed/", headers=auth_headers(reader)).json() == []


def test_cannot_follow_yourself(client: TestClient, make_user, auth_headers) -> None:
    user = make_user()

    response = client.post(f"/users/{user.id}/follow", headers=auth_headers(user))

    assert response.status_code == 400


def test_feed_type_filter_keeps_own_posts(client: TestClient, make_user, auth_headers) -> None:
    author = make_user()
    own = _post(client, auth_headers(author), text="mine", category="personal")

    response = client.get("/feed/", params={"type": "mentor"}, headers=auth_headers(author))

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [own["id"]]


def test_unknown_feed_type_is_bad_request(client: TestClient, make_user, auth_headers) -> None:
    user = make_user()

    response = client.get("/feed/", params={"type": "memes"}, headers=auth_headers(user))

    assert response.status_code == 400


def test_students_cannot_post_broadcasts(client: TestClient, make_user, auth_headers) -> None:
    student = make_user()

    response = client.post(
        "/feed/",
        json={"text": "attention", "category": "admin-broadcast"},
        headers=auth_headers(student),
    )

    assert response.status_code == 403


def test_community_membership_controls_visibility(
    client: TestClient, admin, make_user, auth_headers
) -> None:
    author, member = make_user(), make_user()
    community = client.post(
        "/communities/", json={"name": "Chess"}, headers=auth_headers(admin)
    ).json()
    post = _post(
        client,
        auth_headers(author),
        text="tournament",
        category="community",
        visibility="community",
        community_id=community["id"],
    )

    assert client.get("/feed/", headers=auth_headers(member)).json() == []
    joined = client.post(
        f"/communities/{community['id']}/membership", headers=auth_headers(member)
    )
    assert joined.json() == {"member": True, "changed": True}
    assert [item["id"] for item in client.get("/feed/", headers=auth_headers(member)).json()] == [
        post["id"]
    ]

    client.delete(f"/communities/{community['id']}/membership", headers=auth_headers(member))
    assert client.get("/feed/", headers=auth_headers(member)).json() == []


def test_like_and_comment_notify_author(client: TestClient, make_user, auth_headers) -> None:
    author, fan = make_user(), make_user()
    post = _post(client, auth_headers(author), text="rate my project", visibility="public")

    liked = client.post(f"/feed/{post['id']}/like", headers=auth_headers(fan))
    commented = client.post(
        f"/feed/{post['id']}/comment", json={"text": "Nice!"}, headers=auth_headers(fan)
    )

    assert liked.json() == {"liked": True, "likes_count": 1}
    assert commented.status_code == 201
    assert commented.json()["comments"][0]["text"] == "Nice!"
    categories = [
        item["category"]
        for item in client.get("/notifications/", headers=auth_headers(author)).json()["items"]
    ]
    assert sorted(categories) == ["comment", "reaction"]


def test_edit_and_delete_are_restricted(
    client: TestClient, make_user, auth_headers, monkeypatch
) -> None:
    author, other = make_user(), make_user()
    post = _post(
        client,
        auth_headers(author),
        text="draft",
        media=[{"kind": "image", "url": "https://cdn.bcet.edu/a.png", "provider_id": "a.png"}],
    )
    removed = []
    monkeypatch.setattr(
        storage.MediaStore, "delete_media", lambda self, media: removed.extend(media) or 0
    )

    forbidden = client.put(f"/feed/{post['id']}", json={"text": "mine"}, headers=auth_headers(other))
    assert forbidden.status_code == 404

    edited = client.put(f"/feed/{post['id']}", json={"text": "final"}, headers=auth_headers(author))
    assert edited.json()["text"] == "final"

    deleted = client.delete(f"/feed/{post['id']}", headers=auth_headers(author))
    assert deleted.status_code == 204
    assert [media.provider_id for media in removed] == ["a.png"]
    assert client.get("/feed/", headers=auth_headers(author)).json() == []
    assert client.delete(f"/feed/{post['id']}", headers=auth_headers(author)).status_code == 404


def test_pin_is_admin_only(client: TestClient, admin, make_user, auth_headers) -> None:
    author = make_user()
    older = _post(client, auth_headers(author), text="old", visibility="public")
    _post(client, auth_headers(author), text="new", visibility="public")

    assert (
        client.put(f"/feed/{older['id']}/pin", json={"pinned": True}, headers=auth_headers(author))
        .status_code
        == 403
    )
    pinned = client.put(
        f"/feed/{older['id']}/pin", json={"pinned": True}, headers=auth_headers(admin)
    )

    assert pinned.json()["is_pinned"] is True
    assert client.get("/feed/", headers=auth_headers(author)).json()[0]["id"] == older["id"]


def test_hidden_posts_answer_not_found_to_likes_and_comments(
    client: TestClient, make_user, auth_headers
) -> None:
    author, stranger = make_user(), make_user()
    post = _post(client, auth_headers(author), text="friends only", visibility="followers")

    liked = client.post(f"/feed/{post['id']}/like", headers=auth_headers(stranger))
    commented = client.post(
        f"/feed/{post['id']}/comment", json={"text": "hello"}, headers=auth_headers(stranger)
    )

    assert liked.status_code == 404
    assert commented.status_code == 404
    assert "comments" not in commented.json()
    assert client.get("/notifications/", headers=auth_headers(author)).json()["items"] == []

    client.post(f"/users/{author.id}/follow", headers=auth_headers(stranger))
    assert client.post(f"/feed/{post['id']}/like", headers=auth_headers(stranger)).json() == {
        "liked": True,
        "likes_count": 1,
    }
