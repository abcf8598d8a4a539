"""Tests for creating, listing and updating notifications through the use cases."""

from __future__ import annotations

from datetime import timedelta

import pytest

from bcet_connect.application.use_cases.notifications import (
    archive_notifications,
    count_unread,
    create_notification,
    delete_notification,
    dismiss_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    notify_broadcast,
    notify_comment,
    notify_like,
)
from bcet_connect.domain.errors import InvalidArgument, NotFound
from bcet_connect.utils import now_utc


def _notify(session, publisher, user, title="Hello", **kwargs):
    return create_notification(session, publisher, user_id=user.id, title=title, **kwargs)


def test_create_persists_and_dispatches(session, publisher, make_user):
    user = make_user()

    created = _notify(session, publisher, user, payload={"post_id": 3}, category="reaction")

    assert created.id is not None
    assert created.is_read is False
    assert created.payload == {"post_id": 3}
    assert [item.id for item in publisher.dispatched] == [created.id]


def test_create_survives_a_failing_push(session, exploding_publisher, make_user):
    user = make_user()

    created = _notify(session, exploding_publisher, user)

    page = list_notifications(session, user.id)
    assert [item.id for item in page.items] == [created.id]
    assert page.unread_count == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"title": "   "},
        {"title": "Hi", "category": "gossip"},
        {"title": "Hi", "priority": "urgent"},
    ],
)
def test_create_rejects_invalid_input(session, publisher, make_user, kwargs):
    user = make_user()

    with pytest.raises(InvalidArgument):
        create_notification(session, publisher, user_id=user.id, **kwargs)
    assert publisher.dispatched == []


def test_create_requires_a_recipient(session, publisher):
    with pytest.raises(InvalidArgument):
        create_notification(session, publisher, user_id=None, title="Nobody")


def test_mark_read_is_idempotent_and_keeps_first_timestamp(session, publisher, make_user):
    user = make_user()
    notification = _notify(session, publisher, user)

    first = mark_notification_read(session, publisher, user.id, notification.id)
    second = mark_notification_read(session, publisher, user.id, notification.id)

    assert first.is_read and second.is_read
    assert first.read_at is not None
    assert second.read_at == first.read_at
    assert count_unread(session, user.id) == 0


def test_mark_read_of_someone_elses_notification_is_not_found(session, publisher, make_user):
    owner, intruder = make_user(), make_user()
    notification = _notify(session, publisher, owner)

    with pytest.raises(NotFound):
        mark_notification_read(session, publisher, intruder.id, notification.id)

    assert count_unread(session, owner.id) == 1


def test_mark_read_rejects_malformed_id(session, publisher, make_user):
    user = make_user()

    with pytest.raises(InvalidArgument):
        mark_notification_read(session, publisher, user.id, 0)


def test_pages_are_disjoint_contiguous_and_newest_first(session, publisher, make_user):
    user = make_user()
    created = [_notify(session, publisher, user, title=f"n{index}") for index in range(5)]

    first = list_notifications(session, user.id, page=1, page_size=2)
    second = list_notifications(session, user.id, page=2, page_size=2)
    third = list_notifications(session, user.id, page=3, page_size=2)

    seen = [item.id for page in (first, second, third) for item in page.items]
    assert seen == [item.id for item in reversed(created)]
    assert len(third.items) == 1
    assert first.total == second.total == 5


def test_page_size_is_capped(session, publisher, make_user):
    user = make_user()
    _notify(session, publisher, user)

    page = list_notifications(session, user.id, page=1, page_size=10_000)

    assert page.limit == 100


def test_unread_count_scenario(session, publisher, make_user):
    user = make_user()
    created = [_notify(session, publisher, user, title=f"n{index}") for index in range(3)]
    assert count_unread(session, user.id) == 3

    mark_notification_read(session, publisher, user.id, created[0].id)
    assert count_unread(session, user.id) == 2

    modified = mark_all_notifications_read(session, publisher, user.id)
    assert modified == 2
    assert count_unread(session, user.id) == 0
    assert list_notifications(session, user.id, only_unread=True).items == []

    events = [event for _, event, _ in publisher.events]
    assert events == ["notification:read", "notification:allRead"]
    assert publisher.events[-1][2] == {"modified": 2, "unread_count": 0}


def test_state_changes_survive_a_failing_push(session, exploding_publisher, make_user):
    user = make_user()
    notification = _notify(session, None, user)

    updated = mark_notification_read(session, exploding_publisher, user.id, notification.id)

    assert updated.is_read
    assert mark_all_notifications_read(session, exploding_publisher, user.id) == 0


def test_dismissed_notifications_stay_listed_and_unread(session, publisher, make_user):
    user = make_user()
    keep = _notify(session, publisher, user, title="keep")
    hide = _notify(session, publisher, user, title="hide")

    dismissed = dismiss_notification(session, user.id, hide.id)

    assert dismissed.dismissed is True
    assert dismissed.is_read is False
    everything = list_notifications(session, user.id)
    assert {item.id for item in everything.items} == {keep.id, hide.id}
    assert everything.total == 2
    assert everything.unread_count == 2
    assert count_unread(session, user.id) == 2

    filtered = list_notifications(session, user.id, hide_dismissed=True)
    assert [item.id for item in filtered.items] == [keep.id]
    assert filtered.unread_count == 2


def test_dismissing_the_only_unread_notification_keeps_it_counted(
    session, publisher, make_user
):
    user = make_user()
    notification = _notify(session, publisher, user)

    dismiss_notification(session, user.id, notification.id)

    assert count_unread(session, user.id) == 1
    assert [item.id for item in list_notifications(session, user.id).items] == [notification.id]


def test_delete_is_scoped_to_the_owner(session, publisher, make_user):
    owner, intruder = make_user(), make_user()
    notification = _notify(session, publisher, owner)

    with pytest.raises(NotFound):
        delete_notification(session, intruder.id, notification.id)

    delete_notification(session, owner.id, notification.id)
    assert list_notifications(session, owner.id).total == 0
    with pytest.raises(NotFound):
        delete_notification(session, owner.id, notification.id)


def test_archive_hides_old_notifications(session, publisher, make_user):
    user = make_user()
    _notify(session, publisher, user)

    archived = archive_notifications(session, user.id, now_utc() + timedelta(seconds=5))

    assert archived == 1
    assert count_unread(session, user.id) == 0
    assert list_notifications(session, user.id).total == 0


def test_reactions_skip_self_notifications(session, publisher, make_user):
    author, fan = make_user(), make_user()

    assert notify_like(session, publisher, recipient_id=author.id, actor_id=author.id, post_id=1) is None
    liked = notify_like(session, publisher, recipient_id=author.id, actor_id=fan.id, post_id=1)
    commented = notify_comment(session, publisher, recipient_id=author.id, actor_id=fan.id, post_id=1)

    assert liked.category == "reaction"
    assert commented.category == "comment"
    assert liked.redirect_url == "/feed/1"
    assert liked.payload == {"post_id": 1}


def test_broadcast_deduplicates_recipients_and_skips_actor(session, publisher, make_user):
    admin, first, second = make_user(), make_user(), make_user()

    created = notify_broadcast(
        session,
        publisher,
        recipient_ids=[first.id, second.id, first.id, admin.id],
        title="Campus closed",
        actor_id=admin.id,
    )

    assert sorted(item.user_id for item in created) == sorted([first.id, second.id])
    assert all(item.priority == "high" for item in created)
    assert count_unread(session, admin.id) == 0
