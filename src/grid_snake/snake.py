"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from grid_snake.grid import Grid, Position


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) unit vectors.

    World coordinates grow rightwards and upwards, so ``UP`` is ``+y``.
    """

    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, 1)
    DOWN = (0, -1)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def is_opposite(self, other: Direction) -> bool:
        """Return True if *other* would be a 180° reversal of this direction."""
        return _OPPOSITES[self] is other

    @classmethod
    def parse(cls, value: str) -> Direction:
        """Look up a direction by name (``"up"``) or initial (``"U"``)."""
        key = value.strip().upper()
        for direction in cls:
            if direction.name == key or direction.name[0] == key:
                return direction
        raise ValueError(f"Unknown direction: {value!r}.")


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass
class Segment:
    """One snake tile: a world position and the direction it was heading."""

    position: Position
    direction: Direction

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "direction": self.direction.name.lower(),
        }


class SnakeState:
    """Head segment plus an ordered list of trailing body segments.

    ``body[0]`` follows the head directly; ``body[-1]`` is the tail end.
    The body starts empty and only ever grows during a game.
    """

    def __init__(
        self,
        position: Position = (0.0, 0.0),
        direction: Direction = Direction.UP,
    ) -> None:
        if not isinstance(direction, Direction):
            raise TypeError(
                f"direction must be a Direction, got {type(direction).__name__}."
            )
        self.head = Segment(position, direction)
        self.body: list[Segment] = []

    @property
    def heading(self) -> Direction:
        return self.head.direction

    @property
    def length(self) -> int:
        """Number of body segments, excluding the head."""
        return len(self.body)

    def positions(self) -> list[Position]:
        """Return head position followed by every body position."""
        return [self.head.position] + [seg.position for seg in self.body]

    def occupies(self, position: Position) -> bool:
        return position in self.positions()

    def turn(self, direction: Direction) -> bool:
        """Change heading, ignoring 180° reversals. Returns True if applied."""
        if self.head.direction.is_opposite(direction):
            return False
        self.head.direction = direction
        return True

    def advance(self, grid: Grid) -> Position:
        """Move one tile forward and drag the body along.

        Segments are updated from the tail end towards the head so that
        each one copies the pre-move state of the segment in front of it.
        Returns the cell vacated by the tail end (the head's old cell when
        the body is empty).
        """
        vacated = self.body[-1].position if self.body else self.head.position
        for i in range(len(self.body) - 1, -1, -1):
            leader = self.head if i == 0 else self.body[i - 1]
            self.body[i].position = leader.position
            self.body[i].direction = leader.direction

        dx, dy = self.head.direction.value
        x, y = self.head.position
        tile_x, tile_y = grid.tile_size
        self.head.position = grid.snap((x + dx * tile_x, y + dy * tile_y))
        return vacated

    def grow(self, position: Position, direction: Direction) -> Segment:
        """Append a new tail segment at *position*."""
        segment = Segment(position, direction)
        self.body.append(segment)
        return segment

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "head": self.head.to_dict(),
            "body": [seg.to_dict() for seg in self.body],
            "length": self.length,
        }
