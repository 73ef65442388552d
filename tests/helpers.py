"""Shared test helpers for Pomodore."""

from dataclasses import replace

from pomodore.timer.engine import TimerEngine
from pomodore.timer.state import Running


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


class FakeClock:
    """Wall clock in milliseconds that only moves when told to."""

    def __init__(self, start: int = 0):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


def complete_session(engine: TimerEngine):
    """Fast-complete the running session by jumping to the last tick."""
    state = engine.timer_state
    assert isinstance(state, Running)
    engine._state = replace(engine.state, timer_state=replace(state, time_remaining_millis=1000))
    return engine.tick()
