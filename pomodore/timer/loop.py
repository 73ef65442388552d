"""Cancellable once-per-second loop built on ``QTimer``."""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, Qt, QTimer

TICK_INTERVAL_MS = 1000


class TickLoop(QObject):
    """Calls *callback* every *interval_ms* until it returns ``False``.

    ``start()`` always cancels the previous run first, so at most one run
    per loop is alive.  Each run gets a generation number; a callback that
    restarts the loop from inside itself leaves the new run untouched.
    """

    def __init__(
        self,
        callback: Callable[[], bool],
        interval_ms: int = TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._callback = callback
        self._generation = 0
        self._cancelled = True

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_active(self) -> bool:
        return not self._cancelled

    @property
    def generation(self) -> int:
        return self._generation

    def start(self) -> None:
        self.cancel()
        self._cancelled = False
        self._timer.start()

    def cancel(self) -> None:
        self._generation += 1
        self._cancelled = True
        self._timer.stop()

    def _on_timeout(self) -> None:
        if self._cancelled:
            self._timer.stop()
            return
        generation = self._generation
        keep_going = self._callback()
        if not keep_going and generation == self._generation:
            self.cancel()
