"""
Scheduler
=========

Cooperative, single-threaded scheduling for the simulation: per-refresh frame
requests and one-shot deferred callbacks, each with a cancellation handle.

The host calls Scheduler.pump() once per display refresh. Due timers fire
first, then the frame callbacks requested before this pump.
"""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Protocol


class Clock(Protocol):
    """
    Monotonic clock abstraction.

    Simulation code depends on this interface rather than calling real time directly.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock that only moves when told to. Used by tests and the headless env."""

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError(f"Cannot move clock backwards by {seconds}")
        self._now += seconds
        return self._now

    def set(self, value: float) -> None:
        self._now = float(value)


class ScheduledTask:
    """Handle for a frame request or a deferred callback."""

    def __init__(self, callback: Callable[[], None], due: Optional[float] = None):
        self._callback = callback
        self._due = due
        self._cancelled = False
        self._fired = False

    @property
    def due(self) -> Optional[float]:
        """Fire time for deferred callbacks, None for frame requests."""
        return self._due

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> bool:
        """
        Cancel the task.

        Returns:
            True if the task was still pending.
        """
        if not self.pending:
            return False
        self._cancelled = True
        return True

    def run(self) -> None:
        if not self.pending:
            return
        self._fired = True
        self._callback()

    def __repr__(self) -> str:
        state = "pending" if self.pending else ("cancelled" if self._cancelled else "fired")
        kind = "frame" if self._due is None else f"due={self._due:.3f}"
        return f"ScheduledTask({kind}, {state})"


class Scheduler:
    """
    Frame and timer queue driven by the host loop.

    Nothing runs on its own: pump() is the only place callbacks execute, so the
    simulation never sees two callbacks interleave.
    """

    def __init__(self, clock: Optional[Clock] = None):
        """
        Initialize scheduler.

        Args:
            clock: Time source. Uses RealClock if None.
        """
        self._clock: Clock = clock if clock is not None else RealClock()
        self._frames: List[ScheduledTask] = []
        self._timers: List[ScheduledTask] = []

    @property
    def clock(self) -> Clock:
        return self._clock

    def now(self) -> float:
        return self._clock.now()

    def request_frame(self, callback: Callable[[], None]) -> ScheduledTask:
        """Run callback on the next pump()."""
        task = ScheduledTask(callback)
        self._frames.append(task)
        return task

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run callback once, on the first pump() at or after now + delay."""
        task = ScheduledTask(callback, due=self._clock.now() + max(0.0, delay))
        self._timers.append(task)
        return task

    @property
    def pending_frames(self) -> int:
        return sum(1 for task in self._frames if task.pending)

    @property
    def pending_timers(self) -> int:
        return sum(1 for task in self._timers if task.pending)

    def run_due_timers(self) -> int:
        """Fire every timer whose due time has passed. Returns how many fired."""
        now = self._clock.now()
        due = sorted(
            (task for task in self._timers if task.pending and task.due <= now),
            key=lambda task: task.due
        )
        self._timers = [task for task in self._timers if task.pending and task not in due]
        for task in due:
            task.run()
        return len(due)

    def pump(self) -> int:
        """
        Run due timers, then the frame callbacks requested before this call.

        Frames requested from inside a frame callback wait for the next pump.

        Returns:
            Number of callbacks executed.
        """
        executed = self.run_due_timers()

        frames, self._frames = self._frames, []
        for task in frames:
            if task.pending:
                task.run()
                executed += 1
        return executed

    def cancel_all(self) -> None:
        for task in self._frames + self._timers:
            task.cancel()
        self._frames = []
        self._timers = []
