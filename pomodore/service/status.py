"""Background status refresh.

``StatusService`` keeps the always-on status indicator current while a
session runs.  It never reads the controller's state: it only sees the
snapshots that arrive with commands, and it re-derives the remaining time
from wall-clock time elapsed since the snapshot arrived::

    remaining = max(0, initial_remaining - (now - started_at))

A fixed per-tick decrement would fall behind whenever a refresh is
delayed or the process is suspended; the subtraction above cannot.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from ..commands import TimerCommand
from ..timer.loop import TICK_INTERVAL_MS, TickLoop
from ..timer.state import (
    Completed,
    Idle,
    Paused,
    Running,
    TimerMode,
    TimerState,
    format_time,
)

logger = logging.getLogger(__name__)

APP_TITLE = "Pomodore"

MODE_TITLES: dict[TimerMode, str] = {
    TimerMode.WORK: "Work session",
    TimerMode.SHORT_BREAK: "Short break",
    TimerMode.LONG_BREAK: "Long break",
}


def wall_clock_millis() -> int:
    return int(time.time() * 1000)


def remaining_after(initial_remaining: int, started_at: int, now: int) -> int:
    """Time left once ``now - started_at`` ms have passed, never negative."""
    return max(0, initial_remaining - (now - started_at))


# ── payload ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class StatusPayload:
    """What the status indicator shows.  ``mode is None`` marks idle."""

    mode: TimerMode | None
    time_remaining_millis: int = 0
    total_time_millis: int = 0
    paused: bool = False

    @property
    def is_idle(self) -> bool:
        return self.mode is None

    @property
    def title(self) -> str:
        if self.mode is None:
            return APP_TITLE
        return MODE_TITLES[self.mode]

    @property
    def text(self) -> str:
        if self.mode is None:
            return ""
        if self.paused:
            return "Paused"
        return f"Time remaining: {format_time(self.time_remaining_millis)}"

    @property
    def actions(self) -> tuple[TimerCommand, ...]:
        if self.mode is None:
            return (TimerCommand.START,)
        if self.paused:
            return (TimerCommand.RESUME, TimerCommand.SKIP)
        return (TimerCommand.PAUSE, TimerCommand.SKIP)


IDLE_STATUS = StatusPayload(mode=None)


def status_payload_for(state: TimerState | None) -> StatusPayload:
    if isinstance(state, Running):
        return StatusPayload(state.mode, state.time_remaining_millis, state.total_time_millis)
    if isinstance(state, Paused):
        return StatusPayload(
            state.mode, state.time_remaining_millis, state.total_time_millis, paused=True,
        )
    if state is None or isinstance(state, (Idle, Completed)):
        return IDLE_STATUS
    raise TypeError(f"not a timer state: {state!r}")


# ── service ───────────────────────────────────────────────────────────────


class StatusService(QObject):
    """Long-lived status actor driven only through ``handle_command``.

    Signals
    -------
    status_changed(payload: StatusPayload)
        Emitted on every refresh and on every command that changes what
        is shown.
    stopped()
        Emitted after a ``STOP`` command; the indicator should go away.
    """

    status_changed = pyqtSignal(object)
    stopped = pyqtSignal()

    def __init__(
        self,
        clock: Callable[[], int] = wall_clock_millis,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._clock = clock
        self._refresh_loop = TickLoop(self._refresh, interval_ms, self)

        self._current: StatusPayload = IDLE_STATUS
        self._started_at: int = 0
        self._initial_remaining: int = 0

    @property
    def current(self) -> StatusPayload:
        return self._current

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_loop.is_active

    def handle_command(self, command: TimerCommand | str, state: TimerState | None = None) -> None:
        command = TimerCommand.parse(command)
        if command in (TimerCommand.START, TimerCommand.RESUME):
            self._on_start(state)
        elif command is TimerCommand.PAUSE:
            self._on_pause(state)
        elif command is TimerCommand.STOP:
            self._on_stop()
        else:
            logger.warning("Status service ignores %s", command.value)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _on_start(self, state: TimerState | None) -> None:
        if state is None:
            logger.debug("start without a snapshot ignored")
            return
        self._refresh_loop.cancel()
        if isinstance(state, Running):
            self._started_at = self._clock()
            self._initial_remaining = state.time_remaining_millis
            self._current = status_payload_for(state)
            if self._refresh():
                self._refresh_loop.start()
        else:
            self._show(status_payload_for(state))

    def _on_pause(self, state: TimerState | None) -> None:
        self._refresh_loop.cancel()
        if state is not None:
            self._show(status_payload_for(state))
        elif not self._current.is_idle:
            self._show(replace(self._current, paused=True))

    def _on_stop(self) -> None:
        self._refresh_loop.cancel()
        self._initial_remaining = 0
        self._show(IDLE_STATUS)
        self.stopped.emit()

    def _refresh(self) -> bool:
        """Recompute and publish the remaining time.  ``False`` at zero."""
        if self._current.is_idle or self._current.paused:
            return False
        remaining = remaining_after(self._initial_remaining, self._started_at, self._clock())
        self._show(replace(self._current, time_remaining_millis=remaining))
        logger.debug("Status refreshed: %s", self._current.text)
        return remaining > 0

    def _show(self, payload: StatusPayload) -> None:
        self._current = payload
        self.status_changed.emit(payload)
