"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from bcet_connect.domain.entities import Notification
from bcet_connect.domain.errors import PersistenceFailure
from bcet_connect.infrastructure.models import NotificationModel
from bcet_connect.utils import ensure_naive_utc, ensure_utc, now_naive_utc

from ._transactions import commit_or_rollback


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects.

    Every read and write is scoped by the recipient ``user_id``; a record
    owned by someone else behaves exactly like a missing one.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            user_id=notification.user_id,
            actor_id=notification.actor_id,
            category=notification.category,
            title=notification.title,
            message=notification.message or "",
            redirect_url=notification.redirect_url,
            payload=dict(notification.payload or {}),
            priority=notification.priority,
            is_read=False,
            read_at=None,
            dismissed=False,
            archived=False,
            created_at=ensure_naive_utc(notification.created_at) or now_naive_utc(),
        )
        self.session.add(model)
        commit_or_rollback(self.session, action="save the notification")
        self.session.refresh(model)
        return self._to_entity(model)

    def get_for_user(self, user_id: int, notification_id: int) -> Notification | None:
        model = self._owned(user_id, notification_id).one_or_none()
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        offset: int = 0,
        limit: int | None = 20,
        only_unread: bool = False,
        hide_dismissed: bool = False,
    ) -> Sequence[Notification]:
        query = self._visible(
            user_id, only_unread=only_unread, hide_dismissed=hide_dismissed
        ).order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in self._all(query)]

    def count_for_user(
        self,
        user_id: int,
        *,
        only_unread: bool = False,
        hide_dismissed: bool = False,
    ) -> int:
        query = self._visible(
            user_id, only_unread=only_unread, hide_dismissed=hide_dismissed
        )
        return self._scalar_count(query)

    def count_unread(self, user_id: int) -> int:
        """Unread, non-archived rows; dismissing a notification does not read it."""

        return self.count_for_user(user_id, only_unread=True)

    def mark_as_read(self, user_id: int, notification_id: int) -> Notification | None:
        """Flag one notification as read, keeping the first ``read_at`` on repeats."""

        self._owned(user_id, notification_id).filter(
            NotificationModel.is_read.is_(False)
        ).update(
            {NotificationModel.is_read: True, NotificationModel.read_at: now_naive_utc()},
            synchronize_session=False,
        )
        commit_or_rollback(self.session, action="mark the notification as read")
        return self.get_for_user(user_id, notification_id)

    def mark_all_as_read(self, user_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: now_naive_utc(),
                },
                synchronize_session=False,
            )
        )
        commit_or_rollback(self.session, action="mark notifications as read")
        return int(updated or 0)

    def dismiss(self, user_id: int, notification_id: int) -> Notification | None:
        updated = self._owned(user_id, notification_id).update(
            {NotificationModel.dismissed: True}, synchronize_session=False
        )
        commit_or_rollback(self.session, action="dismiss the notification")
        if not updated:
            return None
        return self.get_for_user(user_id, notification_id)

    def delete(self, user_id: int, notification_id: int) -> bool:
        deleted = self._owned(user_id, notification_id).delete(synchronize_session=False)
        commit_or_rollback(self.session, action="delete the notification")
        return bool(deleted)

    def archive_older_than(self, user_id: int, cutoff: datetime) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.archived.is_(False))
            .filter(NotificationModel.created_at < ensure_naive_utc(cutoff))
            .update({NotificationModel.archived: True}, synchronize_session=False)
        )
        commit_or_rollback(self.session, action="archive notifications")
        return int(updated or 0)

    def _owned(self, user_id: int, notification_id: int) -> Query:
        return self.session.query(NotificationModel).filter(
            NotificationModel.id == notification_id,
            NotificationModel.user_id == user_id,
        )

    def _visible(
        self, user_id: int, *, only_unread: bool, hide_dismissed: bool
    ) -> Query:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.archived.is_(False))
        )
        if hide_dismissed:
            query = query.filter(NotificationModel.dismissed.is_(False))
        if only_unread:
            query = query.filter(NotificationModel.is_read.is_(False))
        return query

    def _scalar_count(self, query: Query) -> int:
        try:
            return int(
                query.with_entities(func.count(NotificationModel.id)).scalar() or 0
            )
        except SQLAlchemyError as exc:
            raise PersistenceFailure("Could not count notifications") from exc

    @staticmethod
    def _all(query: Query) -> list[NotificationModel]:
        try:
            return query.all()
        except SQLAlchemyError as exc:
            raise PersistenceFailure("Could not load notifications") from exc

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            actor_id=model.actor_id,
            category=model.category,
            title=model.title,
            message=model.message or "",
            redirect_url=model.redirect_url,
            payload=dict(model.payload or {}),
            priority=model.priority,
            is_read=bool(model.is_read),
            read_at=ensure_utc(model.read_at),
            dismissed=bool(model.dismissed),
            archived=bool(model.archived),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["NotificationRepository"]
