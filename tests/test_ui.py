"""Tests for presentation policy, the tray indicator and app wiring."""

from __future__ import annotations

import pytest

from pomodore.app import PomodoreApp
from pomodore.commands import TimerCommand
from pomodore.service.status import IDLE_STATUS, StatusPayload, StatusService
from pomodore.settings import Settings
from pomodore.timer.state import IDLE, Completed, Paused, Running, TimerMode, UiState
from pomodore.ui.styles import (
    MODE_COLORS,
    can_edit_settings,
    colors_for,
    controls_for,
    should_keep_screen_on,
)
from pomodore.ui.tray import TrayStatusIndicator, make_tray_icon, tooltip_for

from helpers import FakeClock, SignalCollector


# ═══════════════════════════════════════════════════════════════════════
#  STYLE POLICY
# ═══════════════════════════════════════════════════════════════════════


class TestStyles:

    def test_idle_uses_work_colours(self):
        assert colors_for(IDLE) == MODE_COLORS[TimerMode.WORK]

    def test_paused_break_keeps_break_colours(self):
        state = Paused(TimerMode.LONG_BREAK, 1, 2)
        assert colors_for(state) == MODE_COLORS[TimerMode.LONG_BREAK]

    def test_completed_uses_its_mode(self):
        assert colors_for(Completed(TimerMode.SHORT_BREAK)).primary == "#3498DB"

    @pytest.mark.parametrize("state, expected", [
        (IDLE, (TimerCommand.START,)),
        (Completed(TimerMode.SHORT_BREAK), (TimerCommand.START,)),
        (Running(TimerMode.WORK, 1, 2), (TimerCommand.PAUSE, TimerCommand.SKIP)),
        (Paused(TimerMode.WORK, 1, 2), (TimerCommand.RESUME, TimerCommand.STOP)),
    ])
    def test_controls(self, state, expected):
        assert controls_for(state) == expected

    def test_keep_screen_on_only_while_active(self):
        on = Settings(keep_screen_on=True)
        assert should_keep_screen_on(UiState(Running(TimerMode.WORK, 1, 2), settings=on))
        assert should_keep_screen_on(UiState(Paused(TimerMode.WORK, 1, 2), settings=on))
        assert not should_keep_screen_on(UiState(IDLE, settings=on))
        assert not should_keep_screen_on(UiState(Running(TimerMode.WORK, 1, 2)))

    def test_settings_locked_while_active(self):
        assert can_edit_settings(UiState())
        assert can_edit_settings(UiState(Completed(TimerMode.WORK)))
        assert not can_edit_settings(UiState(Paused(TimerMode.WORK, 1, 2)))


# ═══════════════════════════════════════════════════════════════════════
#  TRAY
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTray:

    def test_idle_menu(self):
        tray = TrayStatusIndicator()
        assert tray.action_labels() == ["Start", "Quit"]
        assert tray.tooltip == "Pomodore — Ready"

    def test_running_menu_and_tooltip(self):
        tray = TrayStatusIndicator()
        tray.show_status(StatusPayload(TimerMode.WORK, 90_000, 1_500_000))
        assert tray.action_labels() == ["Pause", "Skip", "Quit"]
        assert tray.tooltip == "Work session — Time remaining: 01:30"

    def test_paused_menu(self):
        tray = TrayStatusIndicator()
        tray.show_status(StatusPayload(TimerMode.SHORT_BREAK, 1_000, 300_000, paused=True))
        assert tray.action_labels() == ["Resume", "Skip", "Quit"]

    def test_actions_emit_commands(self):
        tray = TrayStatusIndicator()
        c = SignalCollector()
        tray.command_requested.connect(c)
        tray.show_status(StatusPayload(TimerMode.WORK, 90_000, 1_500_000))
        tray.trigger("Pause")
        tray.trigger("Skip")
        assert c.items == [TimerCommand.PAUSE, TimerCommand.SKIP]

    def test_quit_action(self):
        tray = TrayStatusIndicator()
        c = SignalCollector()
        tray.quit_requested.connect(c)
        tray.trigger("Quit")
        assert len(c) == 1

    def test_unknown_label(self):
        tray = TrayStatusIndicator()
        with pytest.raises(KeyError):
            tray.trigger("Snooze")

    @pytest.mark.parametrize("payload", [
        IDLE_STATUS,
        StatusPayload(TimerMode.WORK, 1, 2),
        StatusPayload(TimerMode.LONG_BREAK, 1, 2),
        StatusPayload(TimerMode.WORK, 1, 2, paused=True),
    ])
    def test_icons_render(self, payload):
        assert not make_tray_icon(payload).isNull()

    def test_tooltip_for_idle(self):
        assert tooltip_for(IDLE_STATUS) == "Pomodore — Ready"

    def test_refresh_keeps_menu_entries(self):
        tray = TrayStatusIndicator()
        tray.show_status(StatusPayload(TimerMode.WORK, 60_000, 1_500_000))
        pause = tray._menu.actions()[0]
        tray.show_status(StatusPayload(TimerMode.WORK, 59_000, 1_500_000))
        assert tray._menu.actions()[0] is pause
        assert tray.tooltip == "Work session — Time remaining: 00:59"

    def test_kept_entry_still_emits(self):
        tray = TrayStatusIndicator()
        c = SignalCollector()
        tray.command_requested.connect(c)
        tray.show_status(StatusPayload(TimerMode.WORK, 60_000, 1_500_000))
        tray.show_status(StatusPayload(TimerMode.WORK, 59_000, 1_500_000))
        tray.trigger("Pause")
        assert c.items == [TimerCommand.PAUSE]

    def test_menu_rebuilt_when_actions_change(self):
        tray = TrayStatusIndicator()
        tray.show_status(StatusPayload(TimerMode.WORK, 60_000, 1_500_000))
        tray.show_status(StatusPayload(TimerMode.WORK, 60_000, 1_500_000, paused=True))
        assert tray.action_labels() == ["Resume", "Skip", "Quit"]
        tray.show_status(IDLE_STATUS)
        assert tray.action_labels() == ["Start", "Quit"]


# ═══════════════════════════════════════════════════════════════════════
#  APP WIRING
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def app(qapp):
    clock = FakeClock(start=0)
    pomodore = PomodoreApp(status_service=StatusService(clock))
    pomodore.clock = clock
    yield pomodore
    pomodore.quit()


class TestAppWiring:

    def test_start_reaches_tray_through_service(self, app, qapp):
        app.controller.start_timer()
        qapp.processEvents()
        assert app.tray.payload == StatusPayload(TimerMode.WORK, 1_500_000, 1_500_000)
        assert app.tray.action_labels() == ["Pause", "Skip", "Quit"]

    def test_tray_command_drives_controller(self, app, qapp):
        app.controller.start_timer()
        qapp.processEvents()
        app.tray.trigger("Pause")
        assert isinstance(app.controller.timer_state, Paused)
        qapp.processEvents()
        assert app.tray.payload.paused is True

    def test_service_keeps_its_own_time(self, app, qapp):
        app.controller.start_timer()
        qapp.processEvents()
        app.clock.advance(61_000)
        app.status_service._refresh()
        assert app.tray.payload.time_remaining_millis == 1_439_000
        # The controller has not ticked at all.
        assert app.controller.timer_state.time_remaining_millis == 1_500_000

    def test_stop_clears_tray(self, app, qapp):
        app.controller.start_timer()
        qapp.processEvents()
        app.handle_command("stop")
        qapp.processEvents()
        assert app.tray.payload is IDLE_STATUS

    def test_celebration_is_marked_once(self, app):
        app.controller.update_settings(Settings(total_cycles=1))
        app.controller.start_timer()
        app.controller.skip_to_next()
        state = app.controller.state
        assert state.timer_state == IDLE
        assert state.completed_sessions == 1
        assert state.celebration_shown is True
        assert not state.celebration_due

    def test_keep_screen_on_follows_activity(self, app):
        c = SignalCollector()
        app.keep_screen_on_changed.connect(c)
        app.controller.update_settings(Settings(keep_screen_on=True))
        app.controller.start_timer()
        app.controller.stop_timer()
        assert c.items == [True, False]
        assert app.keep_screen_on is False

    def test_quit_stops_everything(self, app):
        c = SignalCollector()
        app.quit_requested.connect(c)
        app.controller.start_timer()
        app.quit()
        assert not app.controller.is_ticking
        assert not app.status_service.is_refreshing
        assert len(c) == 1

    def test_theme_and_controls_follow_state(self, app):
        themes = SignalCollector()
        controls = SignalCollector()
        app.theme_changed.connect(themes)
        app.controls_changed.connect(controls)
        assert app.colors == MODE_COLORS[TimerMode.WORK]
        app.controller.start_timer()
        app.controller.skip_to_next()
        app.controller.pause_timer()
        assert themes.items == [MODE_COLORS[TimerMode.SHORT_BREAK]]
        assert controls.items == [
            (TimerCommand.PAUSE, TimerCommand.SKIP),
            (TimerCommand.RESUME, TimerCommand.STOP),
        ]
        assert app.controls == (TimerCommand.RESUME, TimerCommand.STOP)


def run_one_minute_work_session(app, total_cycles):
    app.controller.update_settings(
        Settings(work_duration_minutes=1, total_cycles=total_cycles)
    )
    app.controller.start_timer()
    for _ in range(60):
        app.controller._on_tick()


class TestCompletionNotifications:

    @pytest.fixture
    def notes(self, app, monkeypatch):
        titles = []
        monkeypatch.setattr(app.tray, "notify", lambda title, body: titles.append(title))
        return titles

    def test_work_session_announces_break(self, app, notes):
        run_one_minute_work_session(app, total_cycles=4)
        assert notes == ["Work session done"]

    def test_final_work_session_only_celebrates(self, app, notes):
        run_one_minute_work_session(app, total_cycles=1)
        assert app.controller.timer_state == IDLE
        assert notes == ["All cycles completed!"]
