"""Values exchanged between the simulation core and its collaborators.

Inputs flow in as :data:`InputEvent` values; outcomes flow out as
:class:`GameEvent`, :class:`AudioCue` and :class:`StateChanged` values that
presentation and audio layers react to.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from grid_snake.snake import Direction

if TYPE_CHECKING:
    from grid_snake.flow import GameFlowState

WALL_REASON = "You hit a wall!"
TAIL_REASON = "You hit your tail!"


class GameEventKind(enum.Enum):
    GAME_OVER = "game_over"
    GAME_WON = "game_won"


@dataclass(frozen=True)
class GameEvent:
    """Terminal outcome of a game; produced at most once per game."""

    kind: GameEventKind
    reason: str | None = None

    @classmethod
    def game_over(cls, reason: str) -> GameEvent:
        return cls(GameEventKind.GAME_OVER, reason)

    @classmethod
    def game_won(cls) -> GameEvent:
        return cls(GameEventKind.GAME_WON)

    @property
    def won(self) -> bool:
        return self.kind is GameEventKind.GAME_WON

    def describe(self) -> str:
        if self.won:
            return "You won!"
        return f"Game over! {self.reason}"

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "reason": self.reason}


class AudioCue(enum.Enum):
    """Fire-and-forget sound notifications."""

    APPLE = "apple"
    WALL = "wall"


@dataclass(frozen=True)
class StateChanged:
    """Emitted whenever the game flow moves between screens."""

    previous: GameFlowState
    current: GameFlowState


class MenuAction(enum.Enum):
    PLAY = "play"
    QUIT = "quit"


@dataclass(frozen=True)
class DirectionPressed:
    direction: Direction


@dataclass(frozen=True)
class PausePressed:
    pass


@dataclass(frozen=True)
class MenuSelected:
    action: MenuAction


InputEvent = DirectionPressed | PausePressed | MenuSelected
