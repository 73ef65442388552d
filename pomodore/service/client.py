"""Controller-side handle on the status service.

The client turns ``UiState`` updates into discrete commands and posts them
over a queued connection, so the service only ever sees messages.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, Qt, pyqtSignal

from ..commands import TimerCommand
from ..timer.state import (
    Completed,
    Idle,
    Paused,
    Running,
    TimerState,
    UiState,
)
from .status import StatusService

logger = logging.getLogger(__name__)


def _same_session(a: TimerState | None, b: TimerState) -> bool:
    return (
        isinstance(a, (Running, Paused))
        and isinstance(b, (Running, Paused))
        and a.mode is b.mode
        and a.total_time_millis == b.total_time_millis
    )


class StatusServiceClient(QObject):
    """Sends ``start``/``resume``/``pause``/``stop`` to a ``StatusService``."""

    command_posted = pyqtSignal(object, object)  # TimerCommand, TimerState | None

    def __init__(self, service: StatusService, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._last_sent: TimerState | None = None
        self.command_posted.connect(
            service.handle_command, Qt.ConnectionType.QueuedConnection,
        )

    def start_service(self, state: Running) -> None:
        self._post(TimerCommand.START, state)

    def update_service(self, state: TimerState) -> None:
        self._post(TimerCommand.RESUME, state)

    def pause_service(self, state: Paused) -> None:
        self._post(TimerCommand.PAUSE, state)

    def stop_service(self) -> None:
        self._post(TimerCommand.STOP, None)

    def sync(self, ui_state: UiState) -> None:
        """Forward whatever changed in *ui_state* since the last command."""
        state = ui_state.timer_state
        previous = self._last_sent

        if isinstance(state, Running):
            if isinstance(previous, Running) and _same_session(previous, state) \
                    and state.time_remaining_millis <= previous.time_remaining_millis:
                return  # a tick; the service keeps its own time
            if isinstance(previous, Paused) and _same_session(previous, state) \
                    and state.time_remaining_millis == previous.time_remaining_millis:
                self.update_service(state)
            else:
                self.start_service(state)
        elif isinstance(state, Paused):
            if previous != state:
                self.pause_service(state)
        elif isinstance(state, (Idle, Completed)):
            if previous is not None:
                self.stop_service()
        else:
            raise TypeError(f"not a timer state: {state!r}")

    def _post(self, command: TimerCommand, state: TimerState | None) -> None:
        logger.debug("Posting %s to status service", command.value)
        self._last_sent = state
        self.command_posted.emit(command, state)
