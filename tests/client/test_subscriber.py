"""Tests for the client-side notification subscriber."""

from __future__ import annotations

import logging

import httpx
import pytest

from eventlink.client import NotificationSubscriber, QueryCache, TabTitle


class FakeConnection:
    def __init__(self, fail: bool = False) -> None:
        self.sent: list[dict] = []
        self.closed = False
        self.fail = fail

    def send_json(self, payload: dict) -> None:
        if self.fail:
            raise ConnectionError("refused")
        self.sent.append(payload)

    def close(self) -> None:
        self.closed = True


def _http(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler), base_url="http://testserver")


@pytest.fixture()
def subscriber():
    popups: list[dict] = []
    client = _http(lambda request: httpx.Response(500))
    instance = NotificationSubscriber(7, client, token="abc", on_popup=popups.append)
    instance.popups = popups
    yield instance
    client.close()


def test_query_cache_invalidates_by_key_prefix():
    cache = QueryCache()
    cache.set(("/api/conversations",), [])
    cache.set(("/api/conversations", 3, "messages"), [])
    cache.set(("/api/notifications/category-counts", 7), {})

    assert cache.invalidate(("/api/conversations",)) == 2
    assert ("/api/notifications/category-counts", 7) in cache


@pytest.mark.parametrize(
    ("count", "expected"),
    [(0, "EventLink"), (3, "(3) EventLink"), (99, "(99) EventLink"), (150, "(99+) EventLink")],
)
def test_tab_title_prefix(count, expected):
    assert TabTitle().update(count) == expected


def test_attach_sends_authenticate_frame(subscriber):
    connection = FakeConnection()

    assert subscriber.attach(connection)
    assert connection.sent == [{"type": "authenticate", "userId": 7, "token": "abc"}]


def test_attach_failure_is_logged_and_falls_back(subscriber, caplog):
    with caplog.at_level(logging.WARNING):
        assert not subscriber.attach(FakeConnection(fail=True))
    assert subscriber.connection is None
    assert "refused" in caplog.text


def test_badge_counts_update_replaces_counts_and_title(subscriber):
    counts = {"messages": 1, "applications": 2, "total": 3}

    assert subscriber.handle({"type": "badge_counts_update", "counts": counts, "user_id": 7})

    assert subscriber.cache.get(("/api/notifications/category-counts", 7)) == counts
    assert subscriber.title.current == "(3) EventLink"


def test_frames_for_another_user_are_ignored(subscriber):
    frame = {"type": "badge_counts_update", "counts": {"total": 4}, "user_id": 8}

    assert not subscriber.handle(frame)
    assert subscriber.title.current == "EventLink"


def test_new_notification_is_deduplicated(subscriber):
    subscriber.cache.set(("/api/notifications", 7), [])
    frame = {"type": "new_notification", "notification": {"id": 11}, "user_id": 7}

    assert subscriber.handle(frame)
    assert not subscriber.handle(frame)
    assert ("/api/notifications", 7) not in subscriber.cache
    assert subscriber.popups == [frame]


def test_new_message_invalidates_conversations_and_pops_up(subscriber):
    subscriber.cache.set(("/api/conversations",), ["stale"])
    frame = {"type": "new_message", "conversation_id": 3, "message": {"id": 1}}

    subscriber.handle(frame)

    assert ("/api/conversations",) not in subscriber.cache
    assert subscriber.popups == [frame]


def test_notification_updates_patch_the_cached_list(subscriber):
    key = ("/api/notifications", 7)
    subscriber.cache.set(key, [{"id": 1, "is_read": False}, {"id": 2, "is_read": False}])

    subscriber.handle({"type": "notification_updated", "notification": {"id": 2, "is_read": True}})
    assert subscriber.cache.get(key)[1]["is_read"] is True

    subscriber.handle({"type": "all_notifications_updated", "notifications": []})
    assert subscriber.cache.get(key) == []


def test_refresh_polls_counts_with_bearer_token():
    seen_headers: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen_headers.append(request.headers.get("Authorization"))
        if request.url.path.endswith("category-counts"):
            return httpx.Response(200, json={"messages": 0, "total": 5})
        return httpx.Response(200, json={"count": 120})

    with _http(handler) as client:
        subscriber = NotificationSubscriber(7, client, token="abc")
        counts = subscriber.refresh()

    assert counts == {"messages": 0, "total": 5}
    assert subscriber.title.current == "(5) EventLink"
    assert subscriber.cache.get(("/api/notifications/unread-count", 7)) == 120
    assert seen_headers == ["Bearer abc", "Bearer abc"]


def test_refresh_never_raises_on_transport_errors(subscriber, caplog):
    with caplog.at_level(logging.WARNING):
        assert subscriber.refresh() is None
    assert "Polling" in caplog.text


def test_switch_user_closes_connection_and_restores_title(subscriber):
    connection = FakeConnection()
    subscriber.attach(connection)
    subscriber.handle({"type": "badge_counts_update", "counts": {"total": 2}})

    subscriber.switch_user(9)

    assert connection.closed
    assert subscriber.user_id == 9
    assert subscriber.title.current == "EventLink"
    assert ("/api/notifications/category-counts", 7) not in subscriber.cache


def test_disabled_subscriber_does_nothing():
    with _http(lambda request: httpx.Response(200, json={})) as client:
        subscriber = NotificationSubscriber(7, client, enabled=False)
        assert not subscriber.attach(FakeConnection())
        assert not subscriber.handle({"type": "badge_counts_update", "counts": {"total": 1}})
        assert subscriber.refresh() is None


@pytest.mark.parametrize(
    "unread_body",
    [{"count": "lots"}, {"count": None}, {"count": [1]}, ["not", "a", "dict"]],
)
def test_refresh_tolerates_malformed_bodies(unread_body):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("category-counts"):
            return httpx.Response(200, json={"messages": 1, "total": None})
        return httpx.Response(200, json=unread_body)

    with _http(handler) as client:
        subscriber = NotificationSubscriber(7, client)
        assert subscriber.refresh() == {"messages": 1, "total": None}

    assert subscriber.title.current == "EventLink"
    assert ("/api/notifications/unread-count", 7) not in subscriber.cache


def test_title_follows_badge_total_on_push_and_poll():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("category-counts"):
            return httpx.Response(200, json={"messages": 1, "total": 1})
        return httpx.Response(200, json={"count": 2})

    with _http(handler) as client:
        subscriber = NotificationSubscriber(7, client)
        subscriber.handle({"type": "badge_counts_update", "counts": {"messages": 1, "total": 1}})
        pushed_title = subscriber.title.current
        subscriber.refresh()

    assert pushed_title == subscriber.title.current == "(1) EventLink"


def test_malformed_frames_are_ignored(subscriber):
    key = ("/api/notifications", 7)

    assert subscriber.handle({"type": "badge_counts_update", "counts": {"total": None}})
    assert subscriber.title.current == "EventLink"
    assert subscriber.handle({"type": "new_notification", "notification": "oops"})

    subscriber.cache.set(key, [{"id": 1}, "junk"])
    subscriber.handle({"type": "notification_updated", "notification": ["oops"]})
    subscriber.handle({"type": "notification_updated", "notification": {"id": 1, "is_read": True}})

    assert subscriber.cache.get(key) == [{"id": 1, "is_read": True}, "junk"]
