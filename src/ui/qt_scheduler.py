"""
Scheduler backed by single-shot QTimers on the Qt main thread.
"""
from typing import Callable, Set
from PyQt5.QtCore import QObject, QTimer

from ..core.scheduler import ScheduledCall, Scheduler


class QtScheduler(Scheduler):
    """Runs deferred paper transitions on the same thread as the game loop."""

    def __init__(self, parent: QObject = None):
        self._parent = parent
        self._timers: Set[QTimer] = set()  # Keep pending timers alive

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)

        def release():
            self._timers.discard(timer)
            timer.stop()
            timer.deleteLater()

        # The QTimer owns the due time
        call = ScheduledCall(callback, None, on_cancel=release)

        def fire():
            release()
            call.run()

        timer.timeout.connect(fire)
        self._timers.add(timer)
        timer.start(int(max(0, delay_ms)))
        return call
