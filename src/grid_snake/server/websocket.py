"""WebSocket handlers for real-time play and spectating."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from grid_snake.events import (
    DirectionPressed,
    InputEvent,
    MenuAction,
    MenuSelected,
    PausePressed,
)
from grid_snake.server.session_manager import SessionManager
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()

_DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

_ACTION_MAP: dict[str, InputEvent] = {
    "pause": PausePressed(),
    "play": MenuSelected(MenuAction.PLAY),
    "quit": MenuSelected(MenuAction.QUIT),
}


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def parse_message(raw: str) -> InputEvent | None:
    """Decode a client message; anything malformed yields ``None``."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None

    direction = msg.get("direction")
    if isinstance(direction, str):
        found = _DIRECTION_MAP.get(direction.lower())
        return DirectionPressed(found) if found is not None else None

    action = msg.get("action")
    if isinstance(action, str):
        return _ACTION_MAP.get(action.lower())
    return None


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send inputs, receive flow state each frame."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()

    # Enforce a single active player socket per session.
    previous_ws = session.player
    if previous_ws is not None and previous_ws is not websocket:
        try:
            await previous_ws.close(code=4008, reason="Replaced by new connection.")
        except Exception:
            logger.warning(
                "Failed closing previous player socket in session %s.", session_id,
            )
    session.player = websocket
    logger.info("Player connected to session %s.", session_id)

    # Send an initial snapshot so the client gets immediate feedback.
    if session.flow is not None:
        await websocket.send_text(
            json.dumps(session.flow.get_state(), separators=(",", ":")),
        )

    try:
        while True:
            event = parse_message(await websocket.receive_text())
            if event is not None:
                await manager.queue_input(session, event)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        # A newer connection may have replaced this socket meanwhile.
        if session.player is websocket:
            session.player = None


@ws_router.websocket("/sessions/{session_id}/spectate")
async def spectate(websocket: WebSocket, session_id: str) -> None:
    """Spectator WebSocket: receive-only flow state stream."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.spectators.append(websocket)
    logger.info("Spectator connected to session %s.", session_id)

    if session.flow is not None:
        await websocket.send_text(
            json.dumps(session.flow.get_state(), separators=(",", ":")),
        )

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Spectator disconnected from session %s.", session_id)
    finally:
        if websocket in session.spectators:
            session.spectators.remove(websocket)
