"""Timers gating fixed-rate simulation ticks and screen countdowns."""

from __future__ import annotations

import enum


class TimerMode(enum.Enum):
    """Whether a timer restarts after finishing."""

    ONCE = "once"
    REPEATING = "repeating"


class Timer:
    """Accumulates real elapsed time against a fixed duration.

    A repeating timer reports :attr:`just_finished` once per :meth:`tick`
    that crosses the duration, however many whole periods the elapsed time
    spans; the remainder carries over. A once timer latches
    :attr:`finished` and reports :attr:`just_finished` only on the crossing
    tick. A paused timer ignores ticks.
    """

    def __init__(self, duration: float, mode: TimerMode = TimerMode.ONCE) -> None:
        if duration < 0:
            raise ValueError("Timer duration must be non-negative.")
        if mode is TimerMode.REPEATING and duration == 0:
            raise ValueError("A repeating timer needs a positive duration.")
        self.duration = float(duration)
        self.mode = mode
        self.elapsed = 0.0
        self.paused = False
        self.times_finished_this_tick = 0
        self._finished = False

    @classmethod
    def from_rate(cls, hertz: float) -> Timer:
        """Build a repeating timer firing *hertz* times per second."""
        if hertz <= 0:
            raise ValueError("Timer rate must be positive.")
        return cls(1.0 / hertz, TimerMode.REPEATING)

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def just_finished(self) -> bool:
        return self.times_finished_this_tick > 0

    @property
    def remaining(self) -> float:
        return max(self.duration - self.elapsed, 0.0)

    def tick(self, delta: float) -> Timer:
        """Advance by *delta* seconds. Returns self for chaining."""
        if delta < 0:
            raise ValueError("Timer delta must be non-negative.")
        self.times_finished_this_tick = 0
        if self.paused:
            return self

        if self.mode is TimerMode.ONCE:
            if self._finished:
                return self
            self.elapsed = min(self.elapsed + delta, self.duration)
            if self.elapsed >= self.duration:
                self._finished = True
                self.times_finished_this_tick = 1
            return self

        self.elapsed += delta
        if self.elapsed >= self.duration:
            self.times_finished_this_tick = int(self.elapsed // self.duration)
            self.elapsed %= self.duration
            self._finished = True
        else:
            self._finished = False
        return self

    def pause(self) -> None:
        self.paused = True

    def unpause(self) -> None:
        self.paused = False

    def reset(self) -> None:
        """Rewind to zero elapsed time. The paused flag is left unchanged."""
        self.elapsed = 0.0
        self.times_finished_this_tick = 0
        self._finished = False
