"""Timer values shared by the engine, controller and status service.

``TimerState`` is a closed union of four frozen variants::

    Idle                                  no countdown
    Running(mode, remaining, total)       counting down
    Paused(mode, remaining, total)        countdown frozen
    Completed(mode)                       a session just finished

Consumers match on the variant with ``isinstance`` and must handle all
four; ``mode_of`` shows the pattern and raises ``TypeError`` on anything
else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..settings import Settings


class TimerMode(Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not TimerMode.WORK


# ── variants ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class _Countdown:
    mode: TimerMode
    time_remaining_millis: int
    total_time_millis: int

    def __post_init__(self) -> None:
        if not 0 <= self.time_remaining_millis <= self.total_time_millis:
            raise ValueError(
                f"time_remaining_millis={self.time_remaining_millis} outside "
                f"0..{self.total_time_millis}"
            )


@dataclass(frozen=True)
class Running(_Countdown):
    pass


@dataclass(frozen=True)
class Paused(_Countdown):
    pass


@dataclass(frozen=True)
class Completed:
    mode: TimerMode


TimerState = Union[Idle, Running, Paused, Completed]

IDLE = Idle()


def mode_of(state: TimerState) -> TimerMode | None:
    """The session mode carried by *state* (``None`` for ``Idle``)."""
    if isinstance(state, (Running, Paused)):
        return state.mode
    if isinstance(state, Completed):
        return state.mode
    if isinstance(state, Idle):
        return None
    raise TypeError(f"not a timer state: {state!r}")


def is_active(state: TimerState) -> bool:
    """True while a countdown exists (running or paused)."""
    return isinstance(state, (Running, Paused))


def format_time(millis: int) -> str:
    """Render *millis* as ``MM:SS``.  Sessions are shorter than an hour."""
    minutes, seconds = divmod(max(0, millis) // 1000, 60)
    return f"{minutes:02d}:{seconds:02d}"


# ── aggregate ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class UiState:
    """Everything the presentation layer needs, as one immutable value."""

    timer_state: TimerState = IDLE
    current_session: int = 1      # 1-based work session within the cycle
    completed_sessions: int = 0   # finished work sessions in this cycle
    settings: Settings = field(default_factory=Settings)
    celebration_shown: bool = False

    @property
    def cycle_finished(self) -> bool:
        return self.completed_sessions >= self.settings.total_cycles

    @property
    def celebration_due(self) -> bool:
        """The one-shot end-of-cycle celebration should fire now."""
        return (
            self.cycle_finished
            and self.completed_sessions > 0
            and isinstance(self.timer_state, Idle)
            and not self.celebration_shown
        )


def can_edit_settings(ui_state: UiState) -> bool:
    """Settings are only editable while no countdown exists."""
    return not is_active(ui_state.timer_state)
