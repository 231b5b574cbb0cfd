"""Axis-aligned collision detection and the head collision policy."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from grid_snake.events import TAIL_REASON, WALL_REASON

if TYPE_CHECKING:
    from grid_snake.apple import Apple
    from grid_snake.config import GameConfig
    from grid_snake.grid import Grid, Position
    from grid_snake.snake import SnakeState


@dataclass(frozen=True)
class Aabb:
    """Axis-aligned box given by its center and full extent."""

    center: Position
    size: tuple[float, float]

    def overlaps(self, other: Aabb) -> bool:
        """Strict overlap test; boxes that only touch do not collide."""
        dx = abs(self.center[0] - other.center[0])
        dy = abs(self.center[1] - other.center[1])
        return (
            dx < (self.size[0] + other.size[0]) / 2
            and dy < (self.size[1] + other.size[1]) / 2
        )


class ColliderKind(enum.Enum):
    APPLE = "apple"
    TAIL = "tail"
    WALL = "wall"


@dataclass(frozen=True)
class Collider:
    kind: ColliderKind
    box: Aabb
    index: int | None = None  # body index for tail segments


@dataclass(frozen=True)
class CollisionOutcome:
    """What the head ran into this tick, after applying priorities."""

    apple: Collider | None = None
    fatal: Collider | None = None

    @property
    def reason(self) -> str | None:
        if self.fatal is None:
            return None
        return WALL_REASON if self.fatal.kind is ColliderKind.WALL else TAIL_REASON


def wall_colliders(grid: Grid, thickness: float) -> list[Collider]:
    """Build the four walls framing the grid one tile beyond its edges."""
    tile_x, tile_y = grid.tile_size
    offset_x, offset_y = grid.wall_offset
    horizontal = (grid.width * tile_x + tile_x + thickness, thickness)
    vertical = (thickness, grid.height * tile_y + tile_y + thickness)
    return [
        Collider(ColliderKind.WALL, Aabb((0.0, offset_y), horizontal)),
        Collider(ColliderKind.WALL, Aabb((0.0, -offset_y), horizontal)),
        Collider(ColliderKind.WALL, Aabb((-offset_x, 0.0), vertical)),
        Collider(ColliderKind.WALL, Aabb((offset_x, 0.0), vertical)),
    ]


def gather_colliders(
    snake: SnakeState,
    apple: Apple | None,
    walls: Iterable[Collider],
    config: GameConfig,
) -> list[Collider]:
    """List everything the head can collide with, apple first."""
    colliders: list[Collider] = []
    if apple is not None:
        colliders.append(
            Collider(ColliderKind.APPLE, Aabb(apple.position, config.apple_size))
        )
    colliders.extend(
        Collider(ColliderKind.TAIL, Aabb(seg.position, config.snake_size), index=i)
        for i, seg in enumerate(snake.body)
    )
    colliders.extend(walls)
    return colliders


def detect_collisions(head: Aabb, colliders: Iterable[Collider]) -> list[Collider]:
    """Return every collider overlapping the head box, in input order."""
    return [collider for collider in colliders if head.overlaps(collider.box)]


def resolve_collisions(hits: Iterable[Collider], body_length: int) -> CollisionOutcome:
    """Apply the collision policy to this tick's hits.

    Walls and tail segments end the game and take precedence over an apple
    hit in the same tick. A tail hit only counts once the body is longer
    than a single stub.
    """
    apple = None
    fatal = None
    for hit in hits:
        if hit.kind is ColliderKind.APPLE:
            apple = apple or hit
        elif hit.kind is ColliderKind.TAIL:
            if body_length > 1 and fatal is None:
                fatal = hit
        elif fatal is None:
            fatal = hit
    if fatal is not None:
        return CollisionOutcome(fatal=fatal)
    return CollisionOutcome(apple=apple)
