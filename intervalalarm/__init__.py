"""Interval Alarm: a fixed run of short intervals with alternating
alert sounds and music."""

__version__ = "0.1.0"
