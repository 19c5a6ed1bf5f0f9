"""Timer package."""

from .engine import TimerEngine, TimerStatus
from .formatting import TimeFormat, format_time, resolve_format
from .scheduler import (
    ElapsedClock,
    Scheduler,
    IntervalScheduler,
    FrameScheduler,
    create_scheduler,
)
from .timeutils import (
    DecomposedTime,
    TimeUnit,
    decompose,
    from_ms,
    to_ms,
    convert_to_ms,
    convert_from_ms,
    seconds,
    minutes,
    hours,
)

__all__ = [
    "TimerEngine",
    "TimerStatus",
    "TimeFormat",
    "format_time",
    "resolve_format",
    "ElapsedClock",
    "Scheduler",
    "IntervalScheduler",
    "FrameScheduler",
    "create_scheduler",
    "DecomposedTime",
    "TimeUnit",
    "decompose",
    "from_ms",
    "to_ms",
    "convert_to_ms",
    "convert_from_ms",
    "seconds",
    "minutes",
    "hours",
]
