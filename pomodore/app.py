"""Application wiring for Pomodore."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from .commands import TimerCommand, dispatch_command
from .service.client import StatusServiceClient
from .service.status import StatusService
from .settings import SettingsRepository
from .timer.controller import SessionController
from .timer.state import TimerMode, UiState
from .ui.styles import ModeColors, colors_for, controls_for, should_keep_screen_on
from .ui.tray import TrayStatusIndicator

logger = logging.getLogger(__name__)

COMPLETION_MESSAGES: dict[TimerMode, tuple[str, str]] = {
    TimerMode.WORK: ("Work session done", "Time for a break."),
    TimerMode.SHORT_BREAK: ("Break over", "Ready for the next session?"),
    TimerMode.LONG_BREAK: ("Long break over", "Ready for the next session?"),
}


class PomodoreApp(QObject):
    """Creates the controller, the status service and the tray indicator
    and connects them.

    The status service has no parent: it belongs to the process, not to
    any window, and only hears from the controller through its client.

    Signals
    -------
    keep_screen_on_changed(enabled: bool)
    theme_changed(colors: ModeColors)
    controls_changed(commands: tuple[TimerCommand, ...])
    quit_requested()
    """

    keep_screen_on_changed = pyqtSignal(bool)
    theme_changed = pyqtSignal(object)
    controls_changed = pyqtSignal(object)
    quit_requested = pyqtSignal()

    def __init__(
        self,
        settings_repository: SettingsRepository | None = None,
        status_service: StatusService | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)

        # ── settings + controller ─────────────────────────────────────
        self._settings_repository = settings_repository or SettingsRepository(self)
        self._controller = SessionController(self._settings_repository, self)

        # ── background status ─────────────────────────────────────────
        self._status_service = status_service or StatusService()
        self._status_client = StatusServiceClient(self._status_service, self)

        # ── tray ──────────────────────────────────────────────────────
        self._tray = TrayStatusIndicator(self)

        self._keep_screen_on = False
        self._colors = colors_for(self._controller.timer_state)
        self._controls = controls_for(self._controller.timer_state)

        self._controller.state_changed.connect(self._status_client.sync)
        self._controller.state_changed.connect(self._on_state_changed)
        self._controller.session_completed.connect(self._on_session_completed)
        self._status_service.status_changed.connect(self._tray.show_status)
        self._tray.command_requested.connect(self.handle_command)
        self._tray.quit_requested.connect(self.quit)

    @property
    def controller(self) -> SessionController:
        return self._controller

    @property
    def status_service(self) -> StatusService:
        return self._status_service

    @property
    def tray(self) -> TrayStatusIndicator:
        return self._tray

    @property
    def keep_screen_on(self) -> bool:
        return self._keep_screen_on

    @property
    def colors(self) -> ModeColors:
        return self._colors

    @property
    def controls(self) -> tuple[TimerCommand, ...]:
        return self._controls

    def show(self) -> None:
        self._tray.show()

    def handle_command(self, command: TimerCommand | str) -> None:
        dispatch_command(self._controller, command)

    def quit(self) -> None:
        logger.info("Quitting")
        self._controller.shutdown()
        self._status_service.handle_command(TimerCommand.STOP)
        self._tray.hide()
        self.quit_requested.emit()

    def _on_state_changed(self, state: UiState) -> None:
        keep_on = should_keep_screen_on(state)
        if keep_on != self._keep_screen_on:
            self._keep_screen_on = keep_on
            self.keep_screen_on_changed.emit(keep_on)

        colors = colors_for(state.timer_state)
        if colors != self._colors:
            self._colors = colors
            self.theme_changed.emit(colors)

        controls = controls_for(state.timer_state)
        if controls != self._controls:
            self._controls = controls
            self.controls_changed.emit(controls)

        if state.celebration_due:
            logger.info("Cycle of %d sessions complete", state.completed_sessions)
            self._tray.notify("All cycles completed!", "Great work. Take a proper rest.")
            self._controller.mark_celebration_shown()

    def _on_session_completed(self, mode: TimerMode) -> None:
        if mode is TimerMode.WORK and self._controller.state.cycle_finished:
            # The end-of-cycle notification replaces this one.
            return
        title, body = COMPLETION_MESSAGES[mode]
        self._tray.notify(title, body)
