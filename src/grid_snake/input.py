"""Buffering of player direction inputs between simulation ticks."""

from __future__ import annotations

from grid_snake.snake import Direction


class InputBuffer:
    """Pending direction presses since the last tick, oldest first."""

    def __init__(self) -> None:
        self._pending: list[Direction] = []

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def pending(self) -> tuple[Direction, ...]:
        return tuple(self._pending)

    def push(self, direction: Direction) -> None:
        """Queue a direction. Validation happens when the buffer is drained."""
        if not isinstance(direction, Direction):
            raise TypeError(
                f"direction must be a Direction, got {type(direction).__name__}."
            )
        self._pending.append(direction)

    def drain_and_apply(self, heading: Direction) -> Direction | None:
        """Pick the newest input that does not reverse *heading*.

        The buffer is emptied whether or not a direction was found.
        """
        chosen = None
        for direction in reversed(self._pending):
            if not heading.is_opposite(direction):
                chosen = direction
                break
        self._pending.clear()
        return chosen

    def clear(self) -> None:
        self._pending.clear()
