"""Headless runs: scripted replays and simulation throughput benchmarks."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.engine import SimulationContext
from grid_snake.events import DirectionPressed, MenuAction, MenuSelected
from grid_snake.flow import GameFlow, GameFlowState
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

# Script character meaning "no input before this tick".
IDLE = "."


@dataclass
class ScriptedRun:
    """Outcome of :func:`run_script`."""

    outcome: str
    reason: str | None
    score: int
    ticks: int
    frames: int
    body_length: int
    head: tuple[float, float]

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome,
            "reason": self.reason,
            "score": self.score,
            "ticks": self.ticks,
            "frames": self.frames,
            "body_length": self.body_length,
            "head": list(self.head),
        }


def parse_moves(script: str) -> list[Direction | None]:
    """Turn ``"UU.RD"`` into directions, ``None`` standing for an idle tick."""
    moves: list[Direction | None] = []
    for ch in script.replace(" ", ""):
        moves.append(None if ch == IDLE else Direction.parse(ch))
    return moves


def run_script(
    config: GameConfig,
    script: str = "",
    *,
    max_frames: int = 10_000,
    fps: float = 60.0,
) -> ScriptedRun:
    """Drive a whole :class:`GameFlow` from Menu into a game.

    One scripted move is pressed before each simulation tick; once the
    script runs out the snake keeps its heading. Stops when the game ends
    or after *max_frames* frames.
    """
    if fps <= 0:
        raise ValueError("fps must be positive.")
    moves = parse_moves(script)
    flow = GameFlow(replace(config, splash_duration=0.0))
    delta = 1.0 / fps

    flow.step(0.0)
    flow.step(0.0, [MenuSelected(MenuAction.PLAY)])
    if flow.state is not GameFlowState.GAME:
        raise RuntimeError("Flow did not enter the game state.")
    ctx = flow.context

    frames = 0
    next_move = 0
    pressed = False
    while flow.state is GameFlowState.GAME and frames < max_frames:
        inputs = []
        if not pressed and next_move < len(moves):
            if moves[next_move] is not None:
                inputs.append(DirectionPressed(moves[next_move]))
            pressed = True
        step = flow.step(delta, inputs)
        frames += 1
        if step.tick is not None:
            next_move += 1
            pressed = False

    if ctx.outcome is None:
        outcome = "running"
    else:
        outcome = "won" if ctx.outcome.won else "lost"
    return ScriptedRun(
        outcome=outcome,
        reason=ctx.outcome.reason if ctx.outcome else None,
        score=ctx.scoreboard.value,
        ticks=ctx.ticks,
        frames=frames,
        body_length=ctx.snake.length,
        head=ctx.snake.head.position,
    )


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_games: int
    total_ticks: int
    wall_time_seconds: float
    games_per_second: float
    ticks_per_second: float
    mean_score: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games, {self.total_ticks} ticks in "
            f"{self.wall_time_seconds:.2f}s | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.ticks_per_second:.1f} ticks/s, "
            f"mean score {self.mean_score:.2f}"
        )


def benchmark_throughput(
    *,
    num_games: int = 100,
    max_ticks: int = 500,
    grid_width: int = 17,
    grid_height: int = 17,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw tick throughput with random direction presses."""
    if num_games < 1 or max_ticks < 1:
        raise ValueError("num_games and max_ticks must be at least 1.")
    rng = np.random.default_rng(seed)
    directions = list(Direction)
    config = GameConfig(grid_width=grid_width, grid_height=grid_height)

    total_ticks = 0
    total_score = 0
    start = time.perf_counter()

    for _ in range(num_games):
        ctx = SimulationContext(config, rng=np.random.default_rng(int(rng.integers(2**31))))
        while not ctx.finished and ctx.ticks < max_ticks:
            ctx.push_input(directions[int(rng.integers(len(directions)))])
            ctx.tick()
        total_ticks += ctx.ticks
        total_score += ctx.scoreboard.value

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        total_games=num_games,
        total_ticks=total_ticks,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
        mean_score=total_score / num_games,
    )
    logger.info(result.summary())
    return result
