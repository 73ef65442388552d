#!/usr/bin/env python3
"""Pomodore — entry point.

Run with:
    python main.py
    python -m pomodore
"""

from pomodore.__main__ import main


if __name__ == "__main__":
    main()
