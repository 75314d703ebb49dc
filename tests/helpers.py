"""Shared test helpers for IntervalQuest."""

from intervalquest.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class ManualHandle:
    def __init__(self, callback, interval_ms):
        self.callback = callback
        self.interval_ms = interval_ms
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler that only fires when the test says so."""

    def __init__(self):
        self.handles: list[ManualHandle] = []

    def schedule(self, callback, interval_ms):
        handle = ManualHandle(callback, interval_ms)
        self.handles.append(handle)
        return handle

    @property
    def active(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire(self, times: int = 1) -> None:
        """Deliver *times* intervals to every live handle."""
        for _ in range(times):
            for handle in self.active:
                handle.callback()


def run_ticks(engine: TimerEngine, count: int) -> None:
    for _ in range(count):
        engine.tick()


def finish_phase(engine: TimerEngine) -> None:
    """Tick until the current phase's clock runs out."""
    run_ticks(engine, engine.time_remaining)
