"""Persistence helpers for notification entities."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from eventlink.domain.entities import NOTIFICATION_TYPE_NEW_MESSAGE, Notification
from eventlink.infrastructure.models import NotificationModel
from eventlink.utils import (
    ensure_app_naive_datetime,
    now_in_app_naive_datetime,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = None,
    ) -> Sequence[Notification]:
        query = self._live_query(user_id).order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_since(self, user_id: int, since: datetime) -> Sequence[Notification]:
        query = (
            self._live_query(user_id)
            .filter(NotificationModel.is_read.is_(False))
            .filter(NotificationModel.created_at >= ensure_app_naive_datetime(since))
            .order_by(NotificationModel.created_at.asc(), NotificationModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: int) -> int:
        return self._live_query(user_id).filter(NotificationModel.is_read.is_(False)).count()

    def count_unread_by_type(self, user_id: int) -> list[tuple[str, int]]:
        """Return ``(type, unread_count)`` pairs for ``user_id``."""

        rows = (
            self._live_query(user_id)
            .with_entities(NotificationModel.type, func.count(NotificationModel.id))
            .filter(NotificationModel.is_read.is_(False))
            .group_by(NotificationModel.type)
            .all()
        )
        return [(notification_type, int(count)) for notification_type, count in rows]

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at) or now_in_app_naive_datetime()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_id: int) -> Notification:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise LookupError(msg)
        if not model.is_read:
            model.is_read = True
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(
        self, user_id: int, *, types: Iterable[str] | None = None
    ) -> int:
        """Flag unread notifications of ``user_id`` as read, optionally by type."""

        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
        )
        if types is not None:
            query = query.filter(NotificationModel.type.in_(list(types)))
        updated = query.update({NotificationModel.is_read: True}, synchronize_session=False)
        self.session.commit()
        return updated

    def mark_conversation_as_read(self, user_id: int, conversation_id: int) -> int:
        """Flag the ``new_message`` notifications tied to a conversation as read."""

        candidates = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.type == NOTIFICATION_TYPE_NEW_MESSAGE)
            .filter(NotificationModel.is_read.is_(False))
            .all()
        )
        updated = 0
        for model in candidates:
            if _metadata_conversation_id(model.metadata_json) != conversation_id:
                continue
            model.is_read = True
            self.session.add(model)
            updated += 1
        if updated:
            self.session.commit()
        return updated

    def delete(self, notification_id: int) -> None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise LookupError(msg)
        self.session.delete(model)
        self.session.commit()

    def delete_expired(self, now: datetime | None = None) -> int:
        cutoff = ensure_app_naive_datetime(now) or now_in_app_naive_datetime()
        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.expires_at.isnot(None))
            .filter(NotificationModel.expires_at <= cutoff)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def _live_query(self, user_id: int) -> Query:
        now = now_in_app_naive_datetime()
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(
                or_(
                    NotificationModel.expires_at.is_(None),
                    NotificationModel.expires_at > now,
                )
            )
        )

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.user_id = notification.user_id
        model.type = notification.type
        model.title = notification.title
        model.message = notification.message
        model.is_read = notification.is_read
        model.priority = notification.priority
        model.related_entity_type = notification.related_entity_type
        model.related_entity_id = notification.related_entity_id
        model.action_url = notification.action_url
        model.metadata_json = notification.metadata
        model.expires_at = ensure_app_naive_datetime(notification.expires_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            message=model.message,
            is_read=bool(model.is_read),
            priority=model.priority,
            related_entity_type=model.related_entity_type,
            related_entity_id=model.related_entity_id,
            action_url=model.action_url,
            metadata=model.metadata_json,
            expires_at=model.expires_at,
            created_at=model.created_at,
        )


def _metadata_conversation_id(raw: str | None) -> int | None:
    if not raw:
        return None
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    try:
        return int(payload.get("conversation_id"))
    except (TypeError, ValueError):
        return None


__all__ = ["NotificationRepository"]
