"""Control vocabulary shared by in-app controls and the tray action buttons.

The string values are stable; they are what crosses the boundary between
the status indicator and the session controller.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .timer.controller import SessionController

logger = logging.getLogger(__name__)


class TimerCommand(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"
    SKIP = "skip"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: "TimerCommand | str") -> "TimerCommand":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown timer command: {value!r}") from None


def dispatch_command(controller: "SessionController", command: TimerCommand | str) -> None:
    """Route *command* to the matching ``SessionController`` method."""
    command = TimerCommand.parse(command)
    logger.debug("Dispatching %s", command.value)
    if command is TimerCommand.START:
        controller.start_timer()
    elif command is TimerCommand.PAUSE:
        controller.pause_timer()
    elif command is TimerCommand.RESUME:
        controller.resume_timer()
    elif command is TimerCommand.STOP:
        controller.stop_timer()
    elif command is TimerCommand.SKIP:
        controller.skip_to_next()
