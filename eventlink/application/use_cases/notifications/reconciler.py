"""Read-state transitions for notifications and the pushes that follow them."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from eventlink.domain.entities import Notification, User, types_for_category
from eventlink.infrastructure.notifications import LiveBroadcaster, run_side_effect
from eventlink.infrastructure.repositories import NotificationRepository

from .counts import push_badge_counts


def _get_owned_notification(session: Session, actor: User, notification_id: int) -> Notification:
    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise LookupError("Notification not found")
    if notification.user_id != actor.id and not actor.is_admin():
        raise PermissionError("Access denied")
    return notification


def list_notifications(
    session: Session, user_id: int, *, limit: int | None = None
) -> Sequence[Notification]:
    """Return live notifications of ``user_id``, newest first."""

    return NotificationRepository(session).list_for_user(user_id, limit=limit)


def mark_notification_read(
    session: Session, broadcaster: LiveBroadcaster, *, actor: User, notification_id: int
) -> Notification:
    """Mark one notification read. Repeating the call changes nothing."""

    notification = _get_owned_notification(session, actor, notification_id)
    updated = NotificationRepository(session).mark_as_read(notification.id)

    push_badge_counts(session, broadcaster, updated.user_id)
    run_side_effect(
        f"notification_updated {updated.id}",
        broadcaster.notification_updated,
        updated.user_id,
        updated,
    )
    return updated


def mark_category_read(
    session: Session, broadcaster: LiveBroadcaster, *, user_id: int, category: str
) -> int:
    """Mark unread notifications of ``category`` read; invalid categories mutate nothing."""

    types = types_for_category(category)
    updated = NotificationRepository(session).mark_all_as_read(user_id, types=types)
    push_badge_counts(session, broadcaster, user_id)
    return updated


def mark_all_notifications_read(
    session: Session, broadcaster: LiveBroadcaster, *, user_id: int
) -> int:
    repository = NotificationRepository(session)
    updated = repository.mark_all_as_read(user_id)

    push_badge_counts(session, broadcaster, user_id)
    run_side_effect(
        f"all_notifications_updated for user {user_id}",
        broadcaster.all_notifications_updated,
        user_id,
        repository.list_for_user(user_id),
    )
    return updated


def mark_conversation_notifications_read(
    session: Session, broadcaster: LiveBroadcaster, *, user_id: int, conversation_id: int
) -> int:
    """Clear the ``new_message`` notifications a conversation produced for ``user_id``."""

    repository = NotificationRepository(session)
    updated = repository.mark_conversation_as_read(user_id, conversation_id)
    push_badge_counts(session, broadcaster, user_id)
    if updated:
        run_side_effect(
            f"all_notifications_updated for user {user_id}",
            broadcaster.all_notifications_updated,
            user_id,
            repository.list_for_user(user_id),
        )
    return updated


def delete_notification(
    session: Session, broadcaster: LiveBroadcaster, *, actor: User, notification_id: int
) -> None:
    notification = _get_owned_notification(session, actor, notification_id)
    NotificationRepository(session).delete(notification.id)
    push_badge_counts(session, broadcaster, notification.user_id)


def purge_expired_notifications(session: Session) -> int:
    return NotificationRepository(session).delete_expired()


__all__ = [
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_category_read",
    "mark_conversation_notifications_read",
    "mark_notification_read",
    "purge_expired_notifications",
]
