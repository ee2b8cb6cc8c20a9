"""
One-shot deferred callbacks with cancellation handles.

Timed paper transitions (shake end, burn -> ashes) are scheduled through a
Scheduler so a reset can cancel them before they fire. ManualScheduler runs
on a virtual millisecond clock for tests and the OpenCV debug loop; the Qt
app uses ui.qt_scheduler.QtScheduler.
"""
import heapq
import itertools
from typing import Callable, List, Optional, Tuple


class ScheduledCall:
    """
    Handle for a pending callback.

    due_ms is the absolute clock time the call is due on a ManualScheduler,
    or None when a timer owns the timing (QtScheduler).
    """

    def __init__(
        self,
        callback: Callable[[], None],
        due_ms: Optional[float],
        on_cancel: Optional[Callable[[], None]] = None,
    ):
        self._callback = callback
        self.due_ms = due_ms
        self._cancelled = False
        self._done = False
        self._on_cancel = on_cancel

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    @property
    def active(self) -> bool:
        """True while the callback may still run."""
        return not (self._cancelled or self._done)

    def cancel(self) -> bool:
        """
        Prevent the callback from running.

        Returns:
            True if the call was pending, False if it had already run or
            been cancelled.
        """
        if not self.active:
            return False
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()
        return True

    def run(self) -> None:
        """Invoke the callback once, unless cancelled."""
        if not self.active:
            return
        self._done = True
        self._callback()


class Scheduler:
    """Base scheduler. Subclasses decide how time passes."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        raise NotImplementedError


class ManualScheduler(Scheduler):
    """
    Scheduler driven by an explicit clock.

    Nothing fires until advance()/advance_to() moves the clock past a call's
    due time. Due calls run in due-time order, ties in scheduling order.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now_ms = float(start_ms)
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._seq = itertools.count()

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def pending(self) -> int:
        """Number of calls still waiting to run."""
        return sum(1 for _, _, call in self._queue if call.active)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(callback, self._now_ms + max(0.0, delay_ms))
        heapq.heappush(self._queue, (call.due_ms, next(self._seq), call))
        return call

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward by delta_ms. Returns the number of calls run."""
        return self.advance_to(self._now_ms + delta_ms)

    def advance_to(self, now_ms: float) -> int:
        """Move the clock to now_ms (never backwards), running due calls."""
        target = max(self._now_ms, float(now_ms))
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due_ms, _, call = heapq.heappop(self._queue)
            # Callbacks may schedule more work relative to their own due time
            self._now_ms = due_ms
            if call.active:
                call.run()
                ran += 1
        self._now_ms = target
        return ran
