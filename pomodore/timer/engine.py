"""Timer state machine for Pomodore.

Transitions
-----------
Idle | Completed  → Running(mode)              (start)
Running           → Paused                     (pause)
Paused            → Running                    (resume)
Running | Paused  → Idle, counters reset       (stop)
Running | Paused  → next session or Idle       (skip)
Running           → Running, -1000 ms          (tick)
Running           → Completed | Running | Idle (tick reaching zero)

The engine is pure: it never schedules anything and performs no I/O.
``SessionController`` drives ``tick()`` once per second.

Cycle rules
-----------
- After a work session the completed count goes up by one.  A count that
  is a multiple of ``sessions_until_long_break`` earns a long break,
  otherwise a short one.
- When the count reaches ``total_cycles`` the cycle is over: the engine
  goes ``Idle`` and no break is started.
- ``start`` from ``Idle`` after a finished cycle silently resets the
  counters.  ``stop`` always resets them.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..settings import Settings
from .state import (
    IDLE,
    Completed,
    Idle,
    Paused,
    Running,
    TimerMode,
    TimerState,
    UiState,
)

logger = logging.getLogger(__name__)

MILLIS_PER_MINUTE = 60_000
TICK_MILLIS = 1000


def duration_millis(settings: Settings, mode: TimerMode) -> int:
    """Configured length of a *mode* session in milliseconds."""
    if mode is TimerMode.WORK:
        minutes = settings.work_duration_minutes
    elif mode is TimerMode.SHORT_BREAK:
        minutes = settings.short_break_duration_minutes
    else:
        minutes = settings.long_break_duration_minutes
    return minutes * MILLIS_PER_MINUTE


def next_break_mode(completed_sessions: int, sessions_until_long_break: int) -> TimerMode:
    if completed_sessions % sessions_until_long_break == 0:
        return TimerMode.LONG_BREAK
    return TimerMode.SHORT_BREAK


class TimerEngine:
    """Owns one ``UiState`` and every rule that changes it.

    Commands return ``True`` when they changed the state and ``False`` when
    the current state does not accept them.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._state = UiState(settings=settings or Settings())

    @property
    def state(self) -> UiState:
        return self._state

    @property
    def timer_state(self) -> TimerState:
        return self._state.timer_state

    @property
    def settings(self) -> Settings:
        return self._state.settings

    def duration_for(self, mode: TimerMode) -> int:
        return duration_millis(self._state.settings, mode)

    def apply_settings(self, settings: Settings) -> None:
        """Swap in new settings.  A countdown in progress keeps its length."""
        self._state = replace(self._state, settings=settings)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, mode: TimerMode = TimerMode.WORK) -> bool:
        """Begin a *mode* session.  Only valid from Idle or Completed."""
        current = self._state.timer_state
        if not isinstance(current, (Idle, Completed)):
            logger.debug("start ignored while %s", type(current).__name__)
            return False
        if isinstance(current, Idle) and self._state.cycle_finished:
            self._state = replace(
                self._state,
                current_session=1,
                completed_sessions=0,
                celebration_shown=False,
            )
            logger.info("Cycle finished earlier; counters reset")
        self._begin(mode)
        return True

    def pause(self) -> bool:
        current = self._state.timer_state
        if not isinstance(current, Running):
            logger.debug("pause ignored while %s", type(current).__name__)
            return False
        self._set_timer_state(Paused(
            current.mode, current.time_remaining_millis, current.total_time_millis,
        ))
        logger.info("Paused %s with %d ms left", current.mode.value, current.time_remaining_millis)
        return True

    def resume(self) -> bool:
        current = self._state.timer_state
        if not isinstance(current, Paused):
            logger.debug("resume ignored while %s", type(current).__name__)
            return False
        self._set_timer_state(Running(
            current.mode, current.time_remaining_millis, current.total_time_millis,
        ))
        logger.info("Resumed %s", current.mode.value)
        return True

    def stop(self) -> bool:
        """Abandon the countdown and reset the cycle counters."""
        current = self._state.timer_state
        if not isinstance(current, (Running, Paused)):
            logger.debug("stop ignored while %s", type(current).__name__)
            return False
        self._state = replace(
            self._state,
            timer_state=IDLE,
            current_session=1,
            completed_sessions=0,
            celebration_shown=False,
        )
        logger.info("Stopped; cycle reset")
        return True

    def skip(self) -> bool:
        """Jump to the next session without waiting for the countdown."""
        current = self._state.timer_state
        if not isinstance(current, (Running, Paused)):
            logger.debug("skip ignored while %s", type(current).__name__)
            return False

        if current.mode.is_break:
            self._begin(TimerMode.WORK)
            return True

        completed = self._state.completed_sessions + 1
        if completed >= self._state.settings.total_cycles:
            self._state = replace(
                self._state,
                timer_state=IDLE,
                completed_sessions=completed,
                current_session=completed,
            )
            logger.info("Skipped final work session; cycle finished")
            return True

        self._state = replace(
            self._state,
            completed_sessions=completed,
            current_session=self._state.current_session + 1,
        )
        self._begin(next_break_mode(completed, self._state.settings.sessions_until_long_break))
        return True

    def mark_celebration_shown(self) -> None:
        self._state = replace(self._state, celebration_shown=True)

    # ══════════════════════════════════════════════════════════════════
    #  COUNTDOWN
    # ══════════════════════════════════════════════════════════════════

    def tick(self) -> TimerMode | None:
        """Advance a running countdown by one second.

        Returns the mode that finished when this tick completed the
        session, otherwise ``None``.
        """
        current = self._state.timer_state
        if not isinstance(current, Running):
            return None
        remaining = current.time_remaining_millis - TICK_MILLIS
        if remaining <= 0:
            return self.complete()
        self._set_timer_state(replace(current, time_remaining_millis=remaining))
        return None

    def complete(self) -> TimerMode | None:
        """Finish the running session and move on to whatever follows."""
        current = self._state.timer_state
        if not isinstance(current, Running):
            return None
        mode = current.mode
        logger.info("%s session completed", mode.value)

        if mode.is_break:
            self._set_timer_state(Completed(mode))
            return mode

        completed = self._state.completed_sessions + 1
        settings = self._state.settings
        if completed >= settings.total_cycles:
            self._state = replace(
                self._state,
                timer_state=IDLE,
                completed_sessions=completed,
                current_session=completed,
                celebration_shown=False,
            )
            logger.info("All %d work sessions done", completed)
            return mode

        self._state = replace(
            self._state,
            timer_state=Completed(mode),
            completed_sessions=completed,
            current_session=self._state.current_session + 1,
        )
        self._begin(next_break_mode(completed, settings.sessions_until_long_break))
        return mode

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _begin(self, mode: TimerMode) -> None:
        duration = self.duration_for(mode)
        self._set_timer_state(Running(mode, duration, duration))
        logger.info(
            "Started %s session %d (%d ms)",
            mode.value, self._state.current_session, duration,
        )

    def _set_timer_state(self, timer_state: TimerState) -> None:
        self._state = replace(self._state, timer_state=timer_state)
