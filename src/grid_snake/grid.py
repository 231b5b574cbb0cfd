"""Grid representation for the snake game."""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

# A world-space coordinate; grid-aligned positions are integer multiples
# of the tile size.
Position = tuple[float, float]


def _round_half_away(value: float) -> float:
    # round() rounds half to even, which would bias cells towards the center.
    return math.copysign(math.floor(abs(value) + 0.5), value) + 0.0


class Grid:
    """Tile grid centered on the world origin.

    A grid of ``width × height`` tiles places tile centers at
    ``(i * tile_x, j * tile_y)`` for ``i`` in ``[-(width-1)/2, (width-1)/2]``
    and ``j`` likewise for height, so both dimensions must be odd.
    Cells are addressed as ``(col, row)`` integer offsets from the center.
    """

    def __init__(
        self,
        width: int = 17,
        height: int = 17,
        tile_size: tuple[float, float] = (20.0, 20.0),
    ) -> None:
        if width < 3 or height < 3:
            raise ValueError("Grid dimensions must be at least 3×3.")
        if width % 2 == 0 or height % 2 == 0:
            raise ValueError("Grid dimensions must be odd so the grid centers on a tile.")
        if tile_size[0] <= 0 or tile_size[1] <= 0:
            raise ValueError("Tile size must be positive.")
        self.width = width
        self.height = height
        self.tile_size = (float(tile_size[0]), float(tile_size[1]))
        self.half_width = (width - 1) // 2
        self.half_height = (height - 1) // 2

    @property
    def center(self) -> Position:
        return (0.0, 0.0)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def wall_offset(self) -> tuple[float, float]:
        """Distance from the center to the left/right and top/bottom walls."""
        tile_x, tile_y = self.tile_size
        return (
            ((self.width + 1) // 2) * tile_x,
            ((self.height + 1) // 2) * tile_y,
        )

    def snap(self, position: Position) -> Position:
        """Round a world position to the nearest tile center."""
        tile_x, tile_y = self.tile_size
        x, y = position
        return (
            _round_half_away(x / tile_x) * tile_x,
            _round_half_away(y / tile_y) * tile_y,
        )

    def is_aligned(self, position: Position) -> bool:
        """Check whether a position sits exactly on a tile center."""
        return self.snap(position) == (float(position[0]), float(position[1]))

    def to_cell(self, position: Position) -> tuple[int, int]:
        """Convert a world position to ``(col, row)`` offsets from the center."""
        tile_x, tile_y = self.tile_size
        x, y = position
        return int(_round_half_away(x / tile_x)), int(_round_half_away(y / tile_y))

    def to_world(self, col: int, row: int) -> Position:
        """Convert ``(col, row)`` offsets from the center to a world position."""
        tile_x, tile_y = self.tile_size
        return (col * tile_x + 0.0, row * tile_y + 0.0)

    def in_bounds(self, position: Position) -> bool:
        """Check whether a position lies on one of the grid's tiles."""
        col, row = self.to_cell(position)
        return abs(col) <= self.half_width and abs(row) <= self.half_height

    def random_position(self, rng: np.random.Generator) -> Position:
        """Sample a tile center uniformly at random."""
        col = int(rng.integers(-self.half_width, self.half_width, endpoint=True))
        row = int(rng.integers(-self.half_height, self.half_height, endpoint=True))
        return self.to_world(col, row)

    def free_cells(self, occupied: Iterable[Position]) -> list[Position]:
        """Return every tile center not present in *occupied*."""
        taken = np.zeros((self.height, self.width), dtype=bool)
        for position in occupied:
            if not self.in_bounds(position):
                continue
            col, row = self.to_cell(position)
            taken[row + self.half_height, col + self.half_width] = True
        rows, cols = np.where(~taken)
        return [
            self.to_world(c - self.half_width, r - self.half_height)
            for r, c in zip(rows.tolist(), cols.tolist(), strict=True)
        ]

    def to_dict(self) -> dict:
        """Serialize grid configuration to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "tile_size": list(self.tile_size),
        }
