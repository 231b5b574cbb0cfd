"""In-memory session registry, lifecycle management, and async frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.config import GameConfig
from grid_snake.events import InputEvent
from grid_snake.flow import GameFlow
from grid_snake.server.models import SessionStatus, SessionSummary
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

MAX_FINISHED_SESSIONS = 100


@dataclass
class SessionInstance:
    """All state for a single hosted game flow."""

    session_id: str
    config: GameConfig
    frame_interval_ms: int
    status: SessionStatus = SessionStatus.WAITING
    flow: GameFlow | None = None
    player: WebSocket | None = None
    spectators: list[WebSocket] = field(default_factory=list)
    pending_inputs: list[InputEvent] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> SessionSummary:
        flow = self.flow
        ctx = flow.context if flow is not None else None
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            flow_state=flow.state.value if flow is not None else None,
            score=ctx.scoreboard.value if ctx is not None else None,
            frame_interval_ms=self.frame_interval_ms,
        )


class SessionManager:
    """Central registry managing all hosted sessions."""

    def __init__(self, max_finished_sessions: int = MAX_FINISHED_SESSIONS) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        self._sessions: dict[str, SessionInstance] = {}
        self._max_finished_sessions = max_finished_sessions

    def create_session(
        self,
        grid_width: int = 17,
        grid_height: int = 17,
        refresh_rate: float = 6.0,
        initial_direction: str = "up",
        splash_duration: float = 2.0,
        results_duration: float = 3.0,
        seed: int | None = None,
        frame_interval_ms: int = 16,
    ) -> SessionInstance:
        """Create a new session and return the instance."""
        config = GameConfig(
            grid_width=grid_width,
            grid_height=grid_height,
            refresh_rate=refresh_rate,
            initial_direction=Direction.parse(initial_direction),
            splash_duration=splash_duration,
            results_duration=results_duration,
            seed=seed,
        )
        session_id = uuid.uuid4().hex[:12]
        instance = SessionInstance(
            session_id=session_id,
            config=config,
            frame_interval_ms=frame_interval_ms,
        )
        self._sessions[session_id] = instance
        logger.info(
            "Session %s created (grid=%dx%d, %.1f Hz).",
            session_id, grid_width, grid_height, refresh_rate,
        )
        return instance

    def get_session(self, session_id: str) -> SessionInstance | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of sessions that have not finished."""
        return [
            s.summary() for s in self._sessions.values()
            if s.status != SessionStatus.FINISHED
        ]

    def start_session(self, session_id: str) -> None:
        """Build the game flow and launch the frame loop."""
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        if session.status != SessionStatus.WAITING:
            raise ValueError("Session has already been started.")

        session.flow = GameFlow(session.config)
        session.status = SessionStatus.ACTIVE
        session._task = asyncio.create_task(self._frame_loop(session))
        logger.info("Session %s started.", session_id)

    async def queue_input(self, session: SessionInstance, event: InputEvent) -> None:
        """Buffer an input event for the next frame."""
        async with session.lock:
            if session.status == SessionStatus.ACTIVE:
                session.pending_inputs.append(event)

    async def _frame_loop(self, session: SessionInstance) -> None:
        """Step the flow every frame with the real elapsed time."""
        interval = session.frame_interval_ms / 1000.0
        last = time.monotonic()
        try:
            while session.status == SessionStatus.ACTIVE:
                await asyncio.sleep(interval)
                now = time.monotonic()
                async with session.lock:
                    assert session.flow is not None  # noqa: S101
                    inputs, session.pending_inputs = session.pending_inputs, []
                    session.flow.step(now - last, inputs)
                    state = session.flow.get_state()
                    if not session.flow.running:
                        self._mark_finished(session)
                last = now
                await self._broadcast(session, state)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)
            self._mark_finished(session)
        finally:
            if session.status == SessionStatus.FINISHED:
                await self._close_connections(session)
                self._prune_finished_sessions()

    def _mark_finished(self, session: SessionInstance) -> None:
        """Transition a session to finished exactly once."""
        if session.status != SessionStatus.FINISHED:
            session.status = SessionStatus.FINISHED
            session.finished_at = time.monotonic()
            logger.info("Session %s finished.", session.session_id)

    async def _close_connections(self, session: SessionInstance) -> None:
        """Close the player and spectator sockets of a finished session."""
        sockets = list(session.spectators)
        if session.player is not None:
            sockets.append(session.player)
        session.player = None
        session.spectators.clear()
        for ws in sockets:
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session finished.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded registry growth."""
        finished = [
            s for s in self._sessions.values() if s.status == SessionStatus.FINISHED
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(
            key=lambda s: s.finished_at if s.finished_at is not None else s.created_at,
        )
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    async def _broadcast(self, session: SessionInstance, state: dict) -> None:
        """Send flow state to the player and all spectators."""
        payload = json.dumps(state, separators=(",", ":"))

        ws = session.player
        if ws is not None:
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                session.player = None

        dead_spectators: list[WebSocket] = []
        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.spectators):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead_spectators.append(ws)

        for ws in dead_spectators:
            if ws in session.spectators:
                session.spectators.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running frame loops."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
