"""Creation of notification rows followed by best-effort live pushes."""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from eventlink.config import get_settings
from eventlink.domain.entities import (
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    RELATED_ENTITY_TYPES,
    Notification,
)
from eventlink.infrastructure.notifications import LiveBroadcaster, run_side_effect
from eventlink.infrastructure.repositories import NotificationRepository, UserRepository
from eventlink.utils import now_in_app_timezone

from .counts import push_badge_counts


def _encode_metadata(metadata: dict[str, Any] | str | None) -> str | None:
    if metadata is None or isinstance(metadata, str):
        return metadata
    return json.dumps(metadata, default=str)


def create_notification(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    user_id: int,
    type: str,
    title: str,
    message: str,
    priority: str = "normal",
    related_entity_type: str | None = None,
    related_entity_id: int | None = None,
    action_url: str | None = None,
    metadata: dict[str, Any] | str | None = None,
    expires_at: datetime | None = None,
) -> Notification:
    """Persist one unread notification and push it to the recipient.

    The row is committed before any push is attempted; push failures are
    logged and never surface to the caller.
    """

    if type not in NOTIFICATION_TYPES:
        raise ValueError("Invalid notification type")
    if priority not in NOTIFICATION_PRIORITIES:
        raise ValueError("Invalid notification priority")
    if related_entity_type is not None and related_entity_type not in RELATED_ENTITY_TYPES:
        raise ValueError("Invalid related entity type")
    if not title.strip() or not message.strip():
        raise ValueError("Notification title and message are required")
    if UserRepository(session).get(user_id) is None:
        raise LookupError("Recipient not found")

    notification = Notification(
        id=None,
        user_id=user_id,
        type=type,
        title=title.strip(),
        message=message.strip(),
        is_read=False,
        priority=priority,
        related_entity_type=related_entity_type,
        related_entity_id=related_entity_id,
        action_url=action_url,
        metadata=_encode_metadata(metadata),
        expires_at=expires_at,
        created_at=now_in_app_timezone(),
    )
    saved = NotificationRepository(session).create(notification)

    run_side_effect(
        f"new_notification {saved.id} for user {user_id}",
        broadcaster.new_notification,
        user_id,
        saved,
    )
    push_badge_counts(session, broadcaster, user_id)
    return saved


def notify_users(
    session: Session,
    broadcaster: LiveBroadcaster,
    user_ids: Iterable[int],
    **notification_fields: Any,
) -> list[Notification]:
    """Create the same notification for each distinct, still active recipient."""

    unique_ids = list(dict.fromkeys(user_id for user_id in user_ids if user_id))
    active = UserRepository(session).get_map_by_ids(unique_ids)
    return [
        create_notification(session, broadcaster, user_id=user_id, **notification_fields)
        for user_id in unique_ids
        if user_id in active
    ]


def notify_admins(
    session: Session, broadcaster: LiveBroadcaster, **notification_fields: Any
) -> list[Notification]:
    admin_ids = UserRepository(session).list_admin_ids(get_settings().admin_email_list)
    return notify_users(session, broadcaster, admin_ids, **notification_fields)


__all__ = ["create_notification", "notify_admins", "notify_users"]
