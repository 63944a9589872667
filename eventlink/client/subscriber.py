"""Client-side state kept in sync with the live-push channel.

The subscriber mirrors what a browser tab keeps: a query cache of API
responses, the unread prefix of the tab title, and a popup hook. Pushed
frames patch or invalidate the cache; :meth:`NotificationSubscriber.refresh`
is the polling fallback used whenever the socket is unavailable.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Hashable

import httpx

logger = logging.getLogger(__name__)

CATEGORY_COUNTS_PATH = "/api/notifications/category-counts"
UNREAD_COUNT_PATH = "/api/notifications/unread-count"
NOTIFICATIONS_PATH = "/api/notifications"
CONVERSATIONS_PATH = "/api/conversations"

_DEDUP_WINDOW = 100
_TITLE_CAP = 99


def _as_count(value: Any) -> int | None:
    """Return ``value`` as a non-negative count, or ``None`` when malformed."""

    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        count = int(value)
    except (OverflowError, ValueError):
        return None
    return count if count >= 0 else None


class QueryCache:
    """Tuple-keyed response cache with prefix invalidation."""

    def __init__(self) -> None:
        self._entries: dict[tuple[Hashable, ...], Any] = {}

    def get(self, key: tuple[Hashable, ...], default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: tuple[Hashable, ...], value: Any) -> None:
        self._entries[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def invalidate(self, prefix: tuple[Hashable, ...]) -> int:
        """Drop every entry whose key starts with ``prefix``."""

        stale = [key for key in self._entries if key[: len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


class TabTitle:
    """Window title showing ``(N)`` unread items in front of the original."""

    def __init__(self, original: str = "EventLink") -> None:
        self.original = original
        self.current = original

    def update(self, count: int) -> str:
        if count > 0:
            label = f"{_TITLE_CAP}+" if count > _TITLE_CAP else str(count)
            self.current = f"({label}) {self.original}"
        else:
            self.current = self.original
        return self.current

    def restore(self) -> str:
        self.current = self.original
        return self.current


class NotificationSubscriber:
    """Keep one user's cached notification state current.

    ``connection`` objects only need ``send_json`` and ``close``; both the
    Starlette test client session and thin wrappers around a real websocket
    library qualify.
    """

    def __init__(
        self,
        user_id: int | None,
        http: httpx.Client,
        *,
        enabled: bool = True,
        token: str | None = None,
        title: TabTitle | None = None,
        on_popup: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        self.user_id = user_id
        self.http = http
        self.enabled = enabled
        self.token = token
        self.title = title or TabTitle()
        self.on_popup = on_popup
        self.cache = QueryCache()
        self.connection: Any = None
        self._seen_notifications: deque[int] = deque(maxlen=_DEDUP_WINDOW)
        self._handlers: dict[str, Callable[[dict[str, Any]], None]] = {
            "badge_counts_update": self._on_badge_counts,
            "new_message": self._on_new_message,
            "new_notification": self._on_new_notification,
            "conversation_updated": self._on_conversation_changed,
            "conversation_deleted": self._on_conversation_changed,
            "notification_updated": self._on_notification_updated,
            "all_notifications_updated": self._on_all_notifications_updated,
        }

    @property
    def active(self) -> bool:
        return self.enabled and bool(self.user_id)

    def attach(self, connection: Any) -> bool:
        """Authenticate ``connection``; on failure the caller keeps polling."""

        if not self.active:
            return False
        frame: dict[str, Any] = {"type": "authenticate", "userId": self.user_id}
        if self.token:
            frame["token"] = self.token
        try:
            connection.send_json(frame)
        except Exception as exc:
            logger.warning("Live connection for user %s failed: %s", self.user_id, exc)
            self.connection = None
            return False
        self.connection = connection
        return True

    def handle(self, frame: Any) -> bool:
        """Apply one pushed frame; returns ``False`` when it was ignored."""

        if not self.active or not isinstance(frame, dict):
            return False
        addressed_to = frame.get("user_id")
        if addressed_to is not None and addressed_to != self.user_id:
            logger.debug("Ignoring %s addressed to user %s", frame.get("type"), addressed_to)
            return False
        handler = self._handlers.get(frame.get("type"))
        if handler is None:
            return False
        return handler(frame) is not False

    def refresh(self) -> dict[str, Any] | None:
        """Poll the badge endpoints; transport errors are logged, never raised."""

        if not self.active:
            return None
        counts = self._fetch(CATEGORY_COUNTS_PATH)
        if not isinstance(counts, dict):
            counts = None
        else:
            self.cache.set((CATEGORY_COUNTS_PATH, self.user_id), counts)
            # Same source as the pushed badge counts so the title never flips.
            total = _as_count(counts.get("total"))
            if total is not None:
                self.title.update(total)
        unread = self._fetch(UNREAD_COUNT_PATH)
        if isinstance(unread, dict):
            count = _as_count(unread.get("count"))
            if count is not None:
                self.cache.set((UNREAD_COUNT_PATH, self.user_id), count)
        return counts

    def switch_user(self, user_id: int | None, token: str | None = None) -> None:
        self.close()
        self.user_id = user_id
        self.token = token

    def close(self) -> None:
        if self.connection is not None:
            try:
                self.connection.close()
            except Exception as exc:
                logger.debug("Closing live connection failed: %s", exc)
            self.connection = None
        self.cache.clear()
        self._seen_notifications.clear()
        self.title.restore()

    def _fetch(self, path: str) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            response = self.http.get(path, headers=headers)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Polling %s for user %s failed: %s", path, self.user_id, exc)
            return None

    def _popup(self, frame: dict[str, Any]) -> None:
        if self.on_popup is None:
            return
        try:
            self.on_popup(frame)
        except Exception:
            logger.exception("Popup callback failed for %s", frame.get("type"))

    def _on_badge_counts(self, frame: dict[str, Any]) -> bool:
        counts = frame.get("counts")
        if not isinstance(counts, dict):
            return False
        self.cache.set((CATEGORY_COUNTS_PATH, self.user_id), counts)
        total = _as_count(counts.get("total", 0))
        if total is not None:
            self.title.update(total)
        return True

    def _on_new_message(self, frame: dict[str, Any]) -> None:
        self.cache.invalidate((CONVERSATIONS_PATH,))
        self._popup(frame)

    def _on_new_notification(self, frame: dict[str, Any]) -> bool:
        notification = frame.get("notification")
        notification_id = notification.get("id") if isinstance(notification, dict) else None
        if notification_id is not None:
            if notification_id in self._seen_notifications:
                return False
            self._seen_notifications.append(notification_id)
        self.cache.invalidate((NOTIFICATIONS_PATH,))
        self._popup(frame)
        return True

    def _on_conversation_changed(self, frame: dict[str, Any]) -> None:
        self.cache.invalidate((CONVERSATIONS_PATH,))

    def _on_notification_updated(self, frame: dict[str, Any]) -> None:
        updated = frame.get("notification")
        key = (NOTIFICATIONS_PATH, self.user_id)
        cached = self.cache.get(key)
        if not isinstance(updated, dict) or not isinstance(cached, list):
            return
        self.cache.set(
            key,
            [
                updated if isinstance(item, dict) and item.get("id") == updated.get("id") else item
                for item in cached
            ],
        )

    def _on_all_notifications_updated(self, frame: dict[str, Any]) -> None:
        notifications = frame.get("notifications")
        if isinstance(notifications, list):
            self.cache.set((NOTIFICATIONS_PATH, self.user_id), notifications)
