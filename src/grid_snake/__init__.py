"""Grid Snake: fixed-tick snake simulation engine."""

from grid_snake.apple import Apple, AppleSpawner
from grid_snake.clock import Timer, TimerMode
from grid_snake.config import GameConfig
from grid_snake.engine import Scoreboard, SimulationContext, TickResult
from grid_snake.events import (
    AudioCue,
    DirectionPressed,
    GameEvent,
    GameEventKind,
    MenuAction,
    MenuSelected,
    PausePressed,
    StateChanged,
)
from grid_snake.flow import FlowStep, GameFlow, GameFlowState, GameResult
from grid_snake.grid import Grid
from grid_snake.input import InputBuffer
from grid_snake.snake import Direction, Segment, SnakeState

__all__ = [
    "Apple",
    "AppleSpawner",
    "AudioCue",
    "Direction",
    "DirectionPressed",
    "FlowStep",
    "GameConfig",
    "GameEvent",
    "GameEventKind",
    "GameFlow",
    "GameFlowState",
    "GameResult",
    "Grid",
    "InputBuffer",
    "MenuAction",
    "MenuSelected",
    "PausePressed",
    "Scoreboard",
    "Segment",
    "SimulationContext",
    "SnakeState",
    "StateChanged",
    "TickResult",
    "Timer",
    "TimerMode",
]
