"""Packaging for Pomodore.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "Pomodore",
        "CFBundleDisplayName": "Pomodore",
        "CFBundleIdentifier": "digital.tonima.pomodore",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
        "LSUIElement": True,  # tray-only, no Dock icon
    },
}

# py2app only exists on macOS; only ask for it when building the bundle.
APP_BUNDLE = {}
if "py2app" in sys.argv:
    APP_BUNDLE = {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="Pomodore",
    version="0.1.0",
    description="Pomodoro timer with a background status indicator",
    packages=[
        "pomodore",
        "pomodore.database",
        "pomodore.service",
        "pomodore.timer",
        "pomodore.ui",
    ],
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.4",
        "SQLAlchemy>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["pomodore=pomodore.__main__:main"],
    },
    **APP_BUNDLE,
)
