"""Periodic scheduling capability injected into the engine.

The engine never owns a clock.  It asks a scheduler for a repeating
callback and gets back a handle it can cancel; tests swap in a manual
scheduler and drive ticks by hand.
"""

from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class ScheduledHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule(
        self, callback: Callable[[], None], interval_ms: int
    ) -> ScheduledHandle: ...


class QtTimerHandle:
    """Owns one ``QTimer``; cancelling stops and releases it."""

    def __init__(self, timer: QTimer) -> None:
        self._timer: QTimer | None = timer

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtScheduler:
    """Scheduler backed by a fresh ``QTimer`` per schedule call."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def schedule(
        self, callback: Callable[[], None], interval_ms: int
    ) -> QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setInterval(interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        return QtTimerHandle(timer)
