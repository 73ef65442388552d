"""Application settings with key-value persistence.

Settings are stored one row per field in the ``settings`` table of the
application database (see ``database/db.py``)::

    settings = load_settings()
    save_settings(replace(settings, work_duration_minutes=50))

``SettingsRepository`` wraps the same calls in a QObject so the session
controller can subscribe to changes instead of re-reading the store.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from PyQt6.QtCore import QObject, pyqtSignal
from sqlalchemy.exc import SQLAlchemyError

from .database.db import get_session
from .database.models import SettingEntry

logger = logging.getLogger(__name__)

_TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off"})

# Fields whose value is used as a modulus or cycle length.
_AT_LEAST_ONE = frozenset({"sessions_until_long_break", "total_cycles"})


@dataclass(frozen=True)
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_duration_minutes: int = 25
    short_break_duration_minutes: int = 5
    long_break_duration_minutes: int = 15
    sessions_until_long_break: int = 4
    total_cycles: int = 4

    # ── display ───────────────────────────────────────────────────────
    keep_screen_on: bool = False


DEFAULT_SETTINGS = Settings()


def _coerce_count(value: Any, default: int, minimum: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            return default
    else:
        return default
    return number if number >= minimum else default


def _coerce_flag(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return default


def parse_settings(raw: Mapping[str, Any]) -> Settings:
    """Build ``Settings`` from loosely-typed input.

    Values that do not parse fall back to the field default instead of
    rejecting the whole update.  Unknown keys are ignored.
    """
    values: dict[str, Any] = {}
    for f in fields(Settings):
        if f.name not in raw:
            continue
        if f.type in (bool, "bool"):
            values[f.name] = _coerce_flag(raw[f.name], f.default)
        else:
            minimum = 1 if f.name in _AT_LEAST_ONE else 0
            values[f.name] = _coerce_count(raw[f.name], f.default, minimum)
    return Settings(**values)


def settings_to_rows(settings: Settings) -> dict[str, str]:
    """Text form of every field, as written to the key-value table."""
    rows = {}
    for f in fields(Settings):
        value = getattr(settings, f.name)
        if isinstance(value, bool):
            rows[f.name] = "true" if value else "false"
        else:
            rows[f.name] = str(value)
    return rows


def load_settings() -> Settings:
    """Load settings from the database, falling back to defaults."""
    try:
        with get_session() as db:
            raw = {entry.key: entry.value for entry in db.query(SettingEntry)}
    except SQLAlchemyError as exc:
        logger.warning("Could not read settings, using defaults: %s", exc)
        return Settings()
    return parse_settings(raw)


def save_settings(settings: Settings) -> None:
    """Write every field of *settings* to the database."""
    with get_session() as db:
        for key, value in settings_to_rows(settings).items():
            db.merge(SettingEntry(key=key, value=value))


class SettingsRepository(QObject):
    """Settings provider with change notifications.

    Signals
    -------
    settings_changed(settings: Settings)
        Emitted after an update has been written to the store.
    """

    settings_changed = pyqtSignal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._settings: Settings = load_settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    def update(self, new_settings: Settings | Mapping[str, Any]) -> Settings:
        """Persist *new_settings* and notify subscribers.

        Accepts a ``Settings`` instance or raw form values (strings from a
        settings dialog, for example).  Both go through ``parse_settings``,
        so out-of-range fields fall back to their defaults.
        """
        if isinstance(new_settings, Settings):
            new_settings = asdict(new_settings)
        settings = parse_settings(new_settings)
        save_settings(settings)
        self._settings = settings
        logger.info("Settings updated: %s", settings)
        self.settings_changed.emit(settings)
        return settings
