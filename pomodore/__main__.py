"""Allow running Pomodore as a module: python -m pomodore."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .settings import DEFAULT_SETTINGS, settings_to_rows
from .app import PomodoreApp


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db(settings_to_rows(DEFAULT_SETTINGS))
    logging.getLogger("pomodore").info("Pomodore ready")

    app = QApplication(sys.argv)
    app.setApplicationName("Pomodore")
    app.setOrganizationName("Pomodore")
    app.setQuitOnLastWindowClosed(False)

    pomodore = PomodoreApp()
    pomodore.quit_requested.connect(app.quit)
    pomodore.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
