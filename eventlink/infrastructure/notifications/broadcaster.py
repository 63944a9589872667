"""Typed live-push events sent to a user's open connections."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence

from eventlink.domain.entities import BadgeCounts, Notification

logger = logging.getLogger(__name__)

SendFn = Callable[[int, dict[str, Any]], None]

EVENT_NEW_NOTIFICATION = "new_notification"
EVENT_BADGE_COUNTS_UPDATE = "badge_counts_update"
EVENT_NEW_MESSAGE = "new_message"
EVENT_CONVERSATION_UPDATED = "conversation_updated"
EVENT_CONVERSATION_DELETED = "conversation_deleted"
EVENT_NOTIFICATION_UPDATED = "notification_updated"
EVENT_ALL_NOTIFICATIONS_UPDATED = "all_notifications_updated"


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the JSON representation shared by pushes and the HTTP API."""

    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "is_read": notification.is_read,
        "priority": notification.priority,
        "related_entity_type": notification.related_entity_type,
        "related_entity_id": notification.related_entity_id,
        "action_url": notification.action_url,
        "metadata": notification.metadata,
        "expires_at": notification.expires_at.isoformat() if notification.expires_at else None,
        "created_at": notification.created_at.isoformat() if notification.created_at else None,
    }


class LiveBroadcaster:
    """Hand events to the transport once it has been wired in."""

    def __init__(self, send_fn: SendFn | None = None) -> None:
        self._send_fn = send_fn

    def initialize(self, send_fn: SendFn) -> None:
        self._send_fn = send_fn
        logger.info("Live broadcaster initialized")

    @property
    def is_initialized(self) -> bool:
        return self._send_fn is not None

    def broadcast_to_user(self, user_id: int, payload: dict[str, Any]) -> None:
        """Send ``payload`` to ``user_id``; transport errors are logged and re-raised."""

        if self._send_fn is None:
            logger.warning(
                "Live broadcaster not initialized; dropping %s for user %s",
                payload.get("type"),
                user_id,
            )
            return
        message = {**payload, "user_id": user_id}
        try:
            self._send_fn(user_id, message)
        except Exception:
            logger.exception("Error broadcasting %s to user %s", payload.get("type"), user_id)
            raise

    def broadcast_to_users(self, user_ids: Iterable[int], payload: dict[str, Any]) -> None:
        seen: set[int] = set()
        for user_id in user_ids:
            if not user_id or user_id in seen:
                continue
            seen.add(user_id)
            self.broadcast_to_user(user_id, payload)

    def new_notification(self, user_id: int, notification: Notification) -> None:
        self.broadcast_to_user(
            user_id,
            {"type": EVENT_NEW_NOTIFICATION, "notification": serialize_notification(notification)},
        )

    def badge_counts(self, user_id: int, counts: BadgeCounts) -> None:
        self.broadcast_to_user(
            user_id, {"type": EVENT_BADGE_COUNTS_UPDATE, "counts": counts.to_dict()}
        )

    def new_message(
        self,
        user_id: int,
        *,
        message: dict[str, Any],
        sender: dict[str, Any],
        conversation_id: int,
    ) -> None:
        self.broadcast_to_user(
            user_id,
            {
                "type": EVENT_NEW_MESSAGE,
                "message": message,
                "sender": sender,
                "conversation_id": conversation_id,
            },
        )

    def conversation_updated(self, user_id: int, conversation_id: int) -> None:
        self.broadcast_to_user(
            user_id, {"type": EVENT_CONVERSATION_UPDATED, "conversation_id": conversation_id}
        )

    def conversation_deleted(self, user_id: int, conversation_id: int) -> None:
        self.broadcast_to_user(
            user_id, {"type": EVENT_CONVERSATION_DELETED, "conversation_id": conversation_id}
        )

    def notification_updated(self, user_id: int, notification: Notification) -> None:
        self.broadcast_to_user(
            user_id,
            {
                "type": EVENT_NOTIFICATION_UPDATED,
                "notification": serialize_notification(notification),
            },
        )

    def all_notifications_updated(
        self, user_id: int, notifications: Sequence[Notification]
    ) -> None:
        self.broadcast_to_user(
            user_id,
            {
                "type": EVENT_ALL_NOTIFICATIONS_UPDATED,
                "notifications": [serialize_notification(item) for item in notifications],
            },
        )


__all__ = [
    "EVENT_ALL_NOTIFICATIONS_UPDATED",
    "EVENT_BADGE_COUNTS_UPDATE",
    "EVENT_CONVERSATION_DELETED",
    "EVENT_CONVERSATION_UPDATED",
    "EVENT_NEW_MESSAGE",
    "EVENT_NEW_NOTIFICATION",
    "EVENT_NOTIFICATION_UPDATED",
    "LiveBroadcaster",
    "SendFn",
    "serialize_notification",
]
