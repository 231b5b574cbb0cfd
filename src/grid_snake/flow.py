"""Screen-level state machine driving the simulation once per frame."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

import numpy as np

from grid_snake.clock import Timer
from grid_snake.config import GameConfig
from grid_snake.engine import SimulationContext, TickResult
from grid_snake.events import (
    AudioCue,
    DirectionPressed,
    GameEvent,
    InputEvent,
    MenuAction,
    MenuSelected,
    PausePressed,
    StateChanged,
)

logger = logging.getLogger(__name__)

FlowEvent = GameEvent | AudioCue | StateChanged


class GameFlowState(enum.Enum):
    SPLASH = "splash"
    MENU = "menu"
    GAME = "game"
    RESULTS = "results"


@dataclass(frozen=True)
class GameResult:
    """Outcome shown on the results screen."""

    event: GameEvent
    score: int
    ticks: int

    def to_dict(self) -> dict:
        return {
            **self.event.to_dict(),
            "message": self.event.describe(),
            "score": self.score,
            "ticks": self.ticks,
        }


@dataclass
class FlowStep:
    """Result of one :meth:`GameFlow.step` call."""

    state: GameFlowState
    events: list[FlowEvent] = field(default_factory=list)
    tick: TickResult | None = None


class GameFlow:
    """Splash → Menu → Game (⇄ Pause) → Results → Menu.

    Call :meth:`step` once per host frame with the elapsed time and the
    input events that arrived during it. Entering Game builds a fresh
    :class:`SimulationContext`; leaving it drops the context.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.state = GameFlowState.SPLASH
        self.running = True
        self.context: SimulationContext | None = None
        self.result: GameResult | None = None
        self.games_played = 0
        self.splash_timer = Timer(self.config.splash_duration)
        self.results_timer = Timer(self.config.results_duration)
        self._pending_result: GameResult | None = None

        self._handlers: dict[
            GameFlowState, Callable[[float, list[InputEvent], list[FlowEvent]], TickResult | None]
        ] = {
            GameFlowState.SPLASH: self._step_splash,
            GameFlowState.MENU: self._step_menu,
            GameFlowState.GAME: self._step_game,
            GameFlowState.RESULTS: self._step_results,
        }

    @property
    def paused(self) -> bool:
        return self.context is not None and self.context.paused

    def step(self, delta: float, inputs: Iterable[InputEvent] = ()) -> FlowStep:
        """Advance the flow by one frame of *delta* seconds."""
        if delta < 0:
            raise ValueError("delta must be non-negative.")
        if not self.running:
            return FlowStep(self.state)

        emitted: list[FlowEvent] = []
        tick = self._handlers[self.state](delta, list(inputs), emitted)
        return FlowStep(self.state, emitted, tick)

    def _step_splash(
        self, delta: float, inputs: list[InputEvent], emitted: list[FlowEvent],
    ) -> TickResult | None:
        if self.splash_timer.tick(delta).finished:
            self._transition(GameFlowState.MENU, emitted)
        return None

    def _step_menu(
        self, delta: float, inputs: list[InputEvent], emitted: list[FlowEvent],
    ) -> TickResult | None:
        for event in inputs:
            if not isinstance(event, MenuSelected):
                continue
            if event.action is MenuAction.PLAY:
                self._transition(GameFlowState.GAME, emitted)
            else:
                logger.info("Quit selected from menu.")
                self.running = False
            break
        return None

    def _step_game(
        self, delta: float, inputs: list[InputEvent], emitted: list[FlowEvent],
    ) -> TickResult | None:
        ctx = self.context
        for event in inputs:
            if isinstance(event, PausePressed):
                if ctx.paused:
                    ctx.resume()
                else:
                    ctx.pause()
                logger.info("Game %s.", "paused" if ctx.paused else "resumed")
            elif isinstance(event, DirectionPressed) and not ctx.paused:
                ctx.push_input(event.direction)

        if ctx.paused:
            return None
        tick = ctx.update(delta)
        if tick is None:
            return None
        emitted.extend(tick.cues)
        if tick.event is not None:
            emitted.append(tick.event)
            self._pending_result = GameResult(tick.event, ctx.scoreboard.value, ctx.ticks)
            self._transition(GameFlowState.RESULTS, emitted)
        return tick

    def _step_results(
        self, delta: float, inputs: list[InputEvent], emitted: list[FlowEvent],
    ) -> TickResult | None:
        if self.results_timer.tick(delta).finished:
            self._transition(GameFlowState.MENU, emitted)
        return None

    def _transition(self, target: GameFlowState, emitted: list[FlowEvent]) -> None:
        previous = self.state
        self._on_exit(previous)
        self.state = target
        self._on_enter(target)
        emitted.append(StateChanged(previous, target))
        logger.info("Flow %s -> %s", previous.value, target.value)

    def _on_enter(self, state: GameFlowState) -> None:
        if state is GameFlowState.MENU:
            self.results_timer.reset()
        elif state is GameFlowState.GAME:
            self.context = SimulationContext(self.config, rng=self.rng)
            self.games_played += 1
        elif state is GameFlowState.RESULTS:
            self.result, self._pending_result = self._pending_result, None
            self.results_timer.reset()

    def _on_exit(self, state: GameFlowState) -> None:
        if state is GameFlowState.GAME:
            self.context = None
        elif state is GameFlowState.RESULTS:
            self.result = None

    def get_state(self) -> dict:
        """Return a serializable snapshot for presentation layers."""
        return {
            "state": self.state.value,
            "running": self.running,
            "paused": self.paused,
            "games_played": self.games_played,
            "game": self.context.get_state() if self.context else None,
            "result": self.result.to_dict() if self.result else None,
        }
