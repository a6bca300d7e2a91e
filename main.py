#!/usr/bin/env python3
"""Interval Alarm — entry point.

Run with:
    python main.py
    python -m intervalalarm
"""

from intervalalarm.__main__ import main


if __name__ == "__main__":
    main()
