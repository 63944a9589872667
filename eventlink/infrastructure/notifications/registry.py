"""Connection management for live-push websockets."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import defaultdict
from typing import Any, DefaultDict, Set

from anyio import from_thread
from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Track open websocket connections grouped by user.

    Entries exist only between a successful ``authenticate`` frame and the
    socket closing; nothing is persisted across restarts.
    """

    def __init__(self) -> None:
        self._connections: DefaultDict[int, Set[WebSocket]] = defaultdict(set)
        self._lock = threading.Lock()

    def register(self, user_id: int, websocket: WebSocket) -> None:
        with self._lock:
            self._connections[user_id].add(websocket)
        logger.info("User %s connected to live updates", user_id)

    def unregister(self, user_id: int, websocket: WebSocket) -> None:
        """Remove ``websocket`` and drop the user key once no sockets remain."""

        with self._lock:
            connections = self._connections.get(user_id)
            if connections is None:
                return
            connections.discard(websocket)
            if not connections:
                self._connections.pop(user_id, None)
        logger.info("User %s disconnected from live updates", user_id)

    def is_connected(self, user_id: int) -> bool:
        with self._lock:
            return bool(self._connections.get(user_id))

    def connection_count(self, user_id: int | None = None) -> int:
        with self._lock:
            if user_id is not None:
                return len(self._connections.get(user_id, ()))
            return sum(len(connections) for connections in self._connections.values())

    def connected_user_ids(self) -> list[int]:
        with self._lock:
            return sorted(self._connections)

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> None:
        """Send ``message`` to every open connection of ``user_id``.

        Connections that fail are dropped; the first failure is re-raised
        once every connection has been attempted.
        """

        with self._lock:
            connections = list(self._connections.get(user_id, ()))
        first_error: Exception | None = None
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception as exc:
                self.unregister(user_id, connection)
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def deliver(self, user_id: int, message: dict[str, Any]) -> None:
        """Synchronous send primitive handed to :class:`LiveBroadcaster`.

        No-op when the user has no connection. From the event loop the send
        is scheduled as a task; from a worker thread it runs to completion on
        the loop so transport errors reach the caller.
        """

        if not self.is_connected(user_id):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self.send_to_user, user_id, message)
        else:
            loop.create_task(self._send_and_log(user_id, message))

    async def _send_and_log(self, user_id: int, message: dict[str, Any]) -> None:
        try:
            await self.send_to_user(user_id, message)
        except Exception as exc:
            logger.warning("Live push of %s to user %s failed: %s", message.get("type"), user_id, exc)


__all__ = ["ConnectionRegistry"]
