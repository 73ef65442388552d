"""Timer package."""

from .state import (
    IDLE,
    Completed,
    Idle,
    Paused,
    Running,
    TimerMode,
    TimerState,
    UiState,
    can_edit_settings,
    format_time,
    mode_of,
)
from .engine import TimerEngine, duration_millis, next_break_mode
from .loop import TickLoop
from .controller import SessionController

__all__ = [
    "IDLE",
    "Completed",
    "Idle",
    "Paused",
    "Running",
    "TimerMode",
    "TimerState",
    "UiState",
    "can_edit_settings",
    "format_time",
    "mode_of",
    "TimerEngine",
    "duration_millis",
    "next_break_mode",
    "TickLoop",
    "SessionController",
]
