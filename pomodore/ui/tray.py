"""System-tray status indicator with quick action buttons."""

from __future__ import annotations

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QIcon, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QMenu, QSystemTrayIcon

from ..commands import TimerCommand
from ..service.status import IDLE_STATUS, StatusPayload


# ── tray‑icon image generation ────────────────────────────────────────────


def make_tray_icon(payload: StatusPayload) -> QIcon:
    """Generate a 32×32 monochrome template icon.

    - idle:     thin circle outline
    - work:     filled circle
    - break:    thin circle with small dot in centre
    - paused:   two vertical pause bars
    """
    size = 64  # draw at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(0, 0, 0, 220)
    p.setPen(Qt.PenStyle.NoPen)
    p.setBrush(colour)

    cx, cy, r = size // 2, size // 2, size // 2 - 4

    if payload.paused:
        bar_w, bar_h = 8, 28
        gap = 6
        y = cy - bar_h // 2
        p.drawRoundedRect(cx - gap - bar_w, y, bar_w, bar_h, 3, 3)
        p.drawRoundedRect(cx + gap, y, bar_w, bar_h, 3, 3)
    elif payload.mode is not None and not payload.mode.is_break:
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
        if payload.mode is not None:
            p.setPen(Qt.PenStyle.NoPen)
            p.setBrush(colour)
            dot_r = 6
            p.drawEllipse(cx - dot_r, cy - dot_r, dot_r * 2, dot_r * 2)

    p.end()

    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


def tooltip_for(payload: StatusPayload) -> str:
    if payload.text:
        return f"{payload.title} — {payload.text}"
    return f"{payload.title} — Ready"


class TrayStatusIndicator(QObject):
    """Shows ``StatusPayload`` values in the tray and turns menu clicks
    into ``TimerCommand`` values.

    Signals
    -------
    command_requested(command: TimerCommand)
    quit_requested()
    """

    command_requested = pyqtSignal(object)
    quit_requested = pyqtSignal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._tray_icon = QSystemTrayIcon(self)
        self._menu = QMenu()
        self._tray_icon.setContextMenu(self._menu)
        self._payload = IDLE_STATUS
        self._rebuild_menu(IDLE_STATUS.actions)
        self.show_status(IDLE_STATUS)

    @property
    def payload(self) -> StatusPayload:
        return self._payload

    @property
    def tooltip(self) -> str:
        return self._tray_icon.toolTip()

    def action_labels(self) -> list[str]:
        return [a.text() for a in self._menu.actions() if not a.isSeparator()]

    def trigger(self, label: str) -> None:
        """Click the menu entry called *label*."""
        for action in self._menu.actions():
            if action.text() == label:
                action.trigger()
                return
        raise KeyError(label)

    def show(self) -> None:
        self._tray_icon.show()

    def hide(self) -> None:
        self._tray_icon.hide()

    def notify(self, title: str, body: str) -> None:
        self._tray_icon.showMessage(title, body)

    def show_status(self, payload: StatusPayload) -> None:
        # Refreshes arrive every second; an open menu must keep its entries.
        if payload.actions != self._payload.actions:
            self._rebuild_menu(payload.actions)
        self._payload = payload
        self._tray_icon.setIcon(make_tray_icon(payload))
        self._tray_icon.setToolTip(tooltip_for(payload))

    def _rebuild_menu(self, commands: tuple[TimerCommand, ...]) -> None:
        self._menu.clear()
        for command in commands:
            action = self._menu.addAction(command.label)
            action.triggered.connect(
                lambda _checked=False, c=command: self.command_requested.emit(c)
            )
        self._menu.addSeparator()
        quit_action = self._menu.addAction("Quit")
        quit_action.triggered.connect(lambda _checked=False: self.quit_requested.emit())
