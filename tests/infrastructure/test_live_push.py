"""Tests for the broadcaster, the connection registry and side-effect handling."""

from __future__ import annotations

import logging

import anyio
import pytest

from eventlink.domain.entities import BadgeCounts, Notification
from eventlink.infrastructure.notifications import (
    ConnectionRegistry,
    LiveBroadcaster,
    run_side_effect,
)


class RecordingSend:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[int, dict]] = []
        self.error = error

    def __call__(self, user_id: int, message: dict) -> None:
        self.calls.append((user_id, message))
        if self.error is not None:
            raise self.error


class FakeSocket:
    def __init__(self, fail: bool = False) -> None:
        self.sent: list[dict] = []
        self.fail = fail

    async def send_json(self, message: dict) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


def test_uninitialized_broadcaster_logs_and_drops(caplog):
    broadcaster = LiveBroadcaster()

    with caplog.at_level(logging.WARNING):
        broadcaster.broadcast_to_user(1, {"type": "badge_counts_update"})

    assert not broadcaster.is_initialized
    assert "not initialized" in caplog.text


def test_broadcast_stamps_recipient_and_keeps_payload():
    send = RecordingSend()
    broadcaster = LiveBroadcaster()
    broadcaster.initialize(send)

    broadcaster.badge_counts(7, BadgeCounts(messages=2))

    assert send.calls == [
        (
            7,
            {
                "type": "badge_counts_update",
                "counts": {
                    "messages": 2,
                    "applications": 0,
                    "jobs": 0,
                    "ratings": 0,
                    "feedback": 0,
                    "contact_messages": 0,
                    "total": 2,
                },
                "user_id": 7,
            },
        )
    ]


def test_new_notification_frame_carries_serialized_notification():
    send = RecordingSend()
    broadcaster = LiveBroadcaster(send)
    notification = Notification(
        id=5, user_id=3, type="job_update", title="Job Updated", message="Changed"
    )

    broadcaster.new_notification(3, notification)

    (user_id, message), = send.calls
    assert user_id == 3
    assert message["type"] == "new_notification"
    assert message["notification"]["id"] == 5
    assert message["notification"]["is_read"] is False


def test_broadcast_to_users_deduplicates_recipients():
    send = RecordingSend()
    broadcaster = LiveBroadcaster(send)

    broadcaster.broadcast_to_users([1, 2, 1, 0, 2], {"type": "conversation_updated"})

    assert [user_id for user_id, _ in send.calls] == [1, 2]


def test_transport_errors_are_reraised_and_contained_by_side_effects(caplog):
    broadcaster = LiveBroadcaster(RecordingSend(error=RuntimeError("boom")))

    with pytest.raises(RuntimeError):
        broadcaster.conversation_deleted(4, 10)

    with caplog.at_level(logging.WARNING):
        result = run_side_effect("delete push", broadcaster.conversation_deleted, 4, 10)

    assert result.ok is False
    assert isinstance(result.error, RuntimeError)
    assert "delete push" in caplog.text


def test_registry_tracks_connections_per_user():
    registry = ConnectionRegistry()
    first, second = FakeSocket(), FakeSocket()

    registry.register(1, first)
    registry.register(1, second)
    assert registry.connection_count(1) == 2
    assert registry.connected_user_ids() == [1]

    registry.unregister(1, first)
    registry.unregister(1, second)
    assert not registry.is_connected(1)
    assert registry.connection_count() == 0


def test_deliver_to_user_without_connection_is_a_no_op():
    registry = ConnectionRegistry()

    registry.deliver(42, {"type": "badge_counts_update"})

    assert registry.connection_count() == 0


def test_send_to_user_drops_failing_sockets_after_trying_all():
    registry = ConnectionRegistry()
    healthy, broken = FakeSocket(), FakeSocket(fail=True)
    registry.register(1, broken)
    registry.register(1, healthy)

    with pytest.raises(RuntimeError, match="socket closed"):
        anyio.run(registry.send_to_user, 1, {"type": "conversation_updated"})

    assert healthy.sent == [{"type": "conversation_updated"}]
    assert registry.connection_count(1) == 1
