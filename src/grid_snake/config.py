"""Game configuration constants and their JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

# Collider extents as a fraction of the tile (17.5, 12 and 5 on a 20-unit tile).
SNAKE_RATIO = 0.875
APPLE_RATIO = 0.6
WALL_RATIO = 0.25


@dataclass(frozen=True)
class GameConfig:
    """Build-time configuration for a snake game.

    Values are fixed for the lifetime of a game; a new game reads them
    again on entry. Supports JSON serialization for reproducibility.
    """

    # Grid
    grid_width: int = 17
    grid_height: int = 17
    tile_size: tuple[float, float] = (20.0, 20.0)

    # Simulation
    refresh_rate: float = 6.0
    initial_direction: Direction = Direction.UP
    max_spawn_attempts: int = 1_000
    seed: int | None = None

    # Collider extents; None derives them from tile_size
    snake_size: tuple[float, float] | None = None
    apple_size: tuple[float, float] | None = None
    wall_thickness: float | None = None

    # Screens
    window_padding: float = 50.0
    splash_duration: float = 2.0
    results_duration: float = 3.0

    def __post_init__(self) -> None:
        if self.grid_width < 3 or self.grid_height < 3:
            raise ValueError("grid_width and grid_height must each be at least 3.")
        if self.grid_width % 2 == 0 or self.grid_height % 2 == 0:
            raise ValueError("grid_width and grid_height must be odd.")
        if self.tile_size[0] <= 0 or self.tile_size[1] <= 0:
            raise ValueError("tile_size must be positive.")
        if self.refresh_rate <= 0:
            raise ValueError("refresh_rate must be positive.")
        if not isinstance(self.initial_direction, Direction):
            raise TypeError("initial_direction must be a Direction.")
        if self.max_spawn_attempts < 1:
            raise ValueError("max_spawn_attempts must be at least 1.")
        self._derive_collider_extents()
        if not 0 < self.wall_thickness <= min(self.tile_size):
            raise ValueError("wall_thickness must be positive and no larger than tile_size.")
        for name in ("snake_size", "apple_size"):
            extent = getattr(self, name)
            if not 0 < extent[0] <= self.tile_size[0] or not 0 < extent[1] <= self.tile_size[1]:
                raise ValueError(f"{name} must be positive and no larger than tile_size.")
        if self.splash_duration < 0 or self.results_duration < 0:
            raise ValueError("screen durations must be non-negative.")

    def _derive_collider_extents(self) -> None:
        tile_x, tile_y = self.tile_size
        # Frozen dataclass: fields can only be filled in through object.__setattr__.
        if self.snake_size is None:
            object.__setattr__(self, "snake_size", (tile_x * SNAKE_RATIO, tile_y * SNAKE_RATIO))
        if self.apple_size is None:
            object.__setattr__(self, "apple_size", (tile_x * APPLE_RATIO, tile_y * APPLE_RATIO))
        if self.wall_thickness is None:
            object.__setattr__(self, "wall_thickness", min(tile_x, tile_y) * WALL_RATIO)

    @property
    def period(self) -> float:
        """Seconds between simulation ticks."""
        return 1.0 / self.refresh_rate

    @property
    def cell_count(self) -> int:
        return self.grid_width * self.grid_height

    @property
    def win_length(self) -> int:
        """Body length at which the board is full and the game is won."""
        return self.cell_count - 1

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists, enums names)."""
        d = asdict(self)
        d["tile_size"] = list(self.tile_size)
        d["snake_size"] = list(self.snake_size)
        d["apple_size"] = list(self.apple_size)
        d["initial_direction"] = self.initial_direction.name.lower()
        return d

    @classmethod
    def from_dict(cls, data: dict) -> GameConfig:
        """Build a config from a plain dict as produced by :meth:`to_dict`."""
        raw = dict(data)
        for key in ("tile_size", "snake_size", "apple_size"):
            if raw.get(key) is not None:
                raw[key] = tuple(float(v) for v in raw[key])
        if isinstance(raw.get("initial_direction"), str):
            raw["initial_direction"] = Direction.parse(raw["initial_direction"])
        return cls(**raw)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
