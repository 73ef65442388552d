"""Pomodore — a Pomodoro timer with a background status indicator."""

__version__ = "0.1.0"
