"""UI package."""

from .styles import (
    MODE_COLORS,
    can_edit_settings,
    colors_for,
    controls_for,
    should_keep_screen_on,
)
from .tray import TrayStatusIndicator

__all__ = [
    "MODE_COLORS",
    "can_edit_settings",
    "colors_for",
    "controls_for",
    "should_keep_screen_on",
    "TrayStatusIndicator",
]
