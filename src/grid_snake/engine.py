"""Fixed-tick simulation composing grid, snake, apple, and collision logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from grid_snake.apple import Apple, AppleSpawner
from grid_snake.clock import Timer
from grid_snake.collision import (
    Aabb,
    detect_collisions,
    gather_colliders,
    resolve_collisions,
    wall_colliders,
)
from grid_snake.config import GameConfig
from grid_snake.events import AudioCue, GameEvent
from grid_snake.grid import Grid, Position
from grid_snake.input import InputBuffer
from grid_snake.snake import Direction, SnakeState

logger = logging.getLogger(__name__)


class Scoreboard:
    """Apples eaten in the current game."""

    __slots__ = ("value",)

    def __init__(self) -> None:
        self.value = 0

    def increment(self) -> int:
        self.value += 1
        return self.value

    def reset(self) -> None:
        self.value = 0


@dataclass
class TickResult:
    """Everything one simulation tick produced."""

    tick: int
    ate_apple: bool = False
    event: GameEvent | None = None
    cues: list[AudioCue] = field(default_factory=list)


class SimulationContext:
    """All state owned by one running game.

    The context is built when a game starts and dropped when it ends.
    Each call to :meth:`update` feeds real elapsed time to the simulation
    clock; a tick runs only on the frames where the clock fires. Within a
    tick, input resolution happens before movement, movement before
    collision resolution, and collision resolution before any outcome is
    reported.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        cfg = config or GameConfig()
        self.config = cfg
        self.grid = Grid(cfg.grid_width, cfg.grid_height, cfg.tile_size)
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)

        self.clock = Timer.from_rate(cfg.refresh_rate)
        self.input_buffer = InputBuffer()
        self.snake = SnakeState(self.grid.center, cfg.initial_direction)
        self.scoreboard = Scoreboard()
        self.walls = wall_colliders(self.grid, cfg.wall_thickness)

        self.apple_spawner = AppleSpawner(
            self.grid, rng=self.rng, max_attempts=cfg.max_spawn_attempts,
        )
        self.apple: Apple | None = Apple(self.apple_spawner.spawn_initial())

        self.ticks = 0
        self.outcome: GameEvent | None = None

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    @property
    def paused(self) -> bool:
        return self.clock.paused

    def push_input(self, direction: Direction) -> None:
        """Queue a direction press for the next tick."""
        self.input_buffer.push(direction)

    def pause(self) -> None:
        self.clock.pause()

    def resume(self) -> None:
        self.clock.unpause()

    def update(self, delta: float) -> TickResult | None:
        """Advance real time by *delta* seconds.

        Runs at most one tick, returning its result, or ``None`` when the
        clock did not fire.
        """
        if self.finished:
            return None
        if self.clock.tick(delta).just_finished:
            return self.tick()
        return None

    def tick(self) -> TickResult:
        """Run one simulation step regardless of the clock."""
        if self.finished:
            return TickResult(tick=self.ticks)

        turn = self.input_buffer.drain_and_apply(self.snake.heading)
        if turn is not None:
            self.snake.turn(turn)

        vacated = self.snake.advance(self.grid)
        self.ticks += 1
        result = TickResult(tick=self.ticks)

        head_box = Aabb(self.snake.head.position, self.grid.tile_size)
        colliders = gather_colliders(self.snake, self.apple, self.walls, self.config)
        outcome = resolve_collisions(
            detect_collisions(head_box, colliders), self.snake.length,
        )

        if outcome.fatal is not None:
            result.cues.append(AudioCue.WALL)
            result.event = self._finish(GameEvent.game_over(outcome.reason))
        elif outcome.apple is not None:
            result.ate_apple = True
            result.cues.append(AudioCue.APPLE)
            result.event = self._eat_apple(vacated)

        logger.debug(
            "Tick %d: head=%s heading=%s body=%d",
            self.ticks,
            self.snake.head.position,
            self.snake.heading.name,
            self.snake.length,
        )
        return result

    def _eat_apple(self, vacated: Position) -> GameEvent | None:
        """Grow into the vacated tile, score, and place the next apple."""
        eaten = self.apple.position
        score = self.scoreboard.increment()
        self.snake.grow(vacated, self.config.initial_direction)
        logger.info("Apple eaten at tick %d, score %d.", self.ticks, score)

        if self.snake.length == self.config.win_length:
            self.apple = None
            return self._finish(GameEvent.game_won())

        occupied = [eaten, *self.snake.positions()]
        self.apple = Apple(self.apple_spawner.respawn(occupied))
        return None

    def _finish(self, event: GameEvent) -> GameEvent:
        self.outcome = event
        logger.info(
            "%s (tick %d, score %d)", event.describe(), self.ticks, self.scoreboard.value,
        )
        return event

    def get_state(self) -> dict:
        """Return the full, serializable simulation state."""
        return {
            "tick": self.ticks,
            "score": self.scoreboard.value,
            "paused": self.paused,
            "finished": self.finished,
            "outcome": self.outcome.to_dict() if self.outcome else None,
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict(),
            "apple": self.apple.to_dict() if self.apple else None,
        }
