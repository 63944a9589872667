"""Websocket endpoint that streams live notification events to a user."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect, status
from fastapi.concurrency import run_in_threadpool

from eventlink.config import get_settings
from eventlink.infrastructure.database import SessionLocal
from eventlink.infrastructure.notifications import ConnectionRegistry
from eventlink.interfaces.api.dependencies import resolve_current_user

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)


async def _receive_text(websocket: WebSocket) -> str | None:
    """Return the next text frame; binary frames yield ``None``."""

    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", status.WS_1000_NORMAL_CLOSURE))
    return message.get("text")


def _parse_frame(raw: str | None) -> dict[str, Any] | None:
    if raw is None:
        return None
    try:
        frame = json.loads(raw)
    except ValueError:
        return None
    return frame if isinstance(frame, dict) else None


def _parse_user_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.isdigit():
        value = int(value)
    if isinstance(value, int) and value > 0:
        return value
    return None


def _token_matches_user(token: str, user_id: int) -> bool:
    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
    except HTTPException:
        return False
    finally:
        session.close()
    return user.id == user_id


async def _authenticate(websocket: WebSocket) -> int | None:
    """Validate the first frame and return the user it authenticates."""

    frame = _parse_frame(await _receive_text(websocket))
    if frame is None or frame.get("type") != "authenticate":
        return None
    user_id = _parse_user_id(frame.get("userId"))
    if user_id is None:
        return None

    token = frame.get("token")
    if token is None and not get_settings().ws_require_token:
        return user_id
    if not isinstance(token, str) or not token:
        return None
    if not await run_in_threadpool(_token_matches_user, token, user_id):
        return None
    return user_id


@router.websocket("/ws")
async def live_updates(websocket: WebSocket) -> None:
    """Register the socket under its user after the ``authenticate`` frame."""

    registry: ConnectionRegistry = websocket.app.state.registry
    await websocket.accept()
    try:
        user_id = await _authenticate(websocket)
    except WebSocketDisconnect:
        return
    if user_id is None:
        logger.info("Rejected live connection with an invalid authenticate frame")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    registry.register(user_id, websocket)
    try:
        while True:
            frame = _parse_frame(await _receive_text(websocket))
            if frame is None:
                continue
            if frame.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        pass
    finally:
        registry.unregister(user_id, websocket)
