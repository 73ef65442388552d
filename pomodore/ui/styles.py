"""Colours and control availability derived from the timer state."""

from __future__ import annotations

from typing import NamedTuple

from ..commands import TimerCommand
from ..timer.state import (
    Completed,
    Idle,
    Paused,
    Running,
    TimerMode,
    TimerState,
    UiState,
    can_edit_settings,
    is_active,
    mode_of,
)


class ModeColors(NamedTuple):
    primary: str
    secondary: str
    background: str
    accent: str


# ── mode colours ──────────────────────────────────────────────────────────

MODE_COLORS: dict[TimerMode, ModeColors] = {
    TimerMode.WORK:        ModeColors("#E74C3C", "#FF6B6B", "#FFF5F5", "#FF8A80"),  # tomato
    TimerMode.SHORT_BREAK: ModeColors("#3498DB", "#5DADE2", "#F0F8FF", "#74B9FF"),  # sky
    TimerMode.LONG_BREAK:  ModeColors("#9B59B6", "#BB8FCE", "#F8F4FF", "#A29BFE"),  # lavender
}


def display_mode(state: TimerState) -> TimerMode:
    """Mode whose theme is shown.  Idle shows the work theme."""
    return mode_of(state) or TimerMode.WORK


def colors_for(state: TimerState) -> ModeColors:
    return MODE_COLORS[display_mode(state)]


def controls_for(state: TimerState) -> tuple[TimerCommand, ...]:
    """Buttons offered by the main timer view for *state*."""
    if isinstance(state, (Idle, Completed)):
        return (TimerCommand.START,)
    if isinstance(state, Running):
        return (TimerCommand.PAUSE, TimerCommand.SKIP)
    if isinstance(state, Paused):
        return (TimerCommand.RESUME, TimerCommand.STOP)
    raise TypeError(f"not a timer state: {state!r}")


def should_keep_screen_on(ui_state: UiState) -> bool:
    return ui_state.settings.keep_screen_on and is_active(ui_state.timer_state)
