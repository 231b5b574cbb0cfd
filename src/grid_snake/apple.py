"""Apple spawning logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from grid_snake.grid import Grid, Position

logger = logging.getLogger(__name__)


@dataclass
class Apple:
    position: Position

    def to_dict(self) -> dict:
        return {"position": list(self.position)}


class AppleSpawner:
    """Places apples on free tiles by reject-and-retry sampling.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Sampling is bounded by *max_attempts*; past that the spawner draws
    uniformly from an explicit list of free tiles instead.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int = 1_000,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def spawn_initial(self) -> Position:
        """Pick a tile other than the grid center, where the head starts."""
        return self.respawn([self.grid.center])

    def respawn(self, occupied: Iterable[Position]) -> Position:
        """Pick a tile not present in *occupied*.

        Raises ``RuntimeError`` if every tile is occupied.
        """
        taken = set(occupied)
        for _ in range(self.max_attempts):
            candidate = self.grid.random_position(self.rng)
            if candidate not in taken:
                return candidate

        free = self.grid.free_cells(taken)
        if not free:
            raise RuntimeError("No free tile available for an apple.")
        logger.warning(
            "Apple placement fell back to free-tile scan after %d attempts "
            "(%d free tiles).",
            self.max_attempts,
            len(free),
        )
        return free[int(self.rng.integers(len(free)))]
