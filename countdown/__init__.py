"""Countdown: a Qt countdown timer engine with a small desktop front end."""

from .timer import TimerEngine, TimerStatus, TimeFormat

__version__ = "0.1.0"

__all__ = ["TimerEngine", "TimerStatus", "TimeFormat"]
