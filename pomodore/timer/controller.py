"""Session controller: drives the engine once per second and publishes state.

Signals
-------
state_changed(state: UiState)
    Emitted once per accepted command and once per tick.
session_completed(mode: TimerMode)
    Emitted after a session runs out naturally, following the
    ``state_changed`` that carries whatever came next.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from PyQt6.QtCore import QObject, pyqtSignal

from ..settings import Settings, SettingsRepository
from .engine import TimerEngine
from .loop import TICK_INTERVAL_MS, TickLoop
from .state import Running, TimerMode, TimerState, UiState, can_edit_settings

logger = logging.getLogger(__name__)


class SessionController(QObject):
    """Owns the observable ``UiState``.  Nothing else mutates it."""

    state_changed = pyqtSignal(object)
    session_completed = pyqtSignal(object)

    def __init__(
        self,
        settings_repository: SettingsRepository,
        parent: QObject | None = None,
        *,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._settings_repository = settings_repository
        self._engine = TimerEngine(settings_repository.settings)
        self._tick_loop = TickLoop(self._on_tick, tick_interval_ms, self)

        settings_repository.settings_changed.connect(self._on_settings_changed)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> UiState:
        return self._engine.state

    @property
    def timer_state(self) -> TimerState:
        return self._engine.timer_state

    @property
    def is_ticking(self) -> bool:
        return self._tick_loop.is_active

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def start_timer(self, mode: TimerMode = TimerMode.WORK) -> None:
        if self._engine.start(mode):
            self._publish()
            self._tick_loop.start()

    def pause_timer(self) -> None:
        self._tick_loop.cancel()
        if self._engine.pause():
            self._publish()

    def resume_timer(self) -> None:
        if self._engine.resume():
            self._publish()
            self._tick_loop.start()

    def stop_timer(self) -> None:
        self._tick_loop.cancel()
        if self._engine.stop():
            self._publish()

    def skip_to_next(self) -> None:
        if not self._engine.skip():
            return
        self._tick_loop.cancel()
        self._publish()
        if isinstance(self._engine.timer_state, Running):
            self._tick_loop.start()

    def update_settings(self, new_settings: Settings | Mapping[str, Any]) -> None:
        """Persist new settings.  They reach ``UiState`` through the
        repository's ``settings_changed`` notification.

        Ignored while a countdown exists.
        """
        if not can_edit_settings(self._engine.state):
            logger.debug("Settings update ignored while %s", self._engine.timer_state)
            return
        self._settings_repository.update(new_settings)

    def mark_celebration_shown(self) -> None:
        if self._engine.state.celebration_shown:
            return
        self._engine.mark_celebration_shown()
        self._publish()

    def shutdown(self) -> None:
        self._tick_loop.cancel()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> bool:
        """One loop iteration.  Returns ``False`` to end the loop."""
        if not isinstance(self._engine.timer_state, Running):
            return False

        finished = self._engine.tick()
        self._publish()
        if finished is None:
            return True

        self.session_completed.emit(finished)
        if isinstance(self._engine.timer_state, Running):
            # The next session owns a fresh loop.
            self._tick_loop.start()
        return False

    def _on_settings_changed(self, settings: Settings) -> None:
        self._engine.apply_settings(settings)
        self._publish()

    def _publish(self) -> None:
        self.state_changed.emit(self._engine.state)
