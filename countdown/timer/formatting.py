"""Display formatting for remaining time.

Presets zero-pad every field to its natural width (2 digits for minutes
and seconds, 3 for milliseconds) except the leading field, which is
printed as-is so it can grow past its modulus::

    format_time(65_000, TimeFormat.MM_SS)            -> "1:05"
    format_time(3_723_004, TimeFormat.HH_MM_SS_SSS)  -> "1:02:03.004"
    format_time(90_500, TimeFormat.SS)               -> "90"

A callable may be passed instead of a preset; it receives the raw
milliseconds and owns the formatting entirely.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Union

from .timeutils import decompose


class TimeFormat(Enum):
    HH_MM_SS = "HH:MM:SS"
    HH_MM_SS_SSS = "HH:MM:SS.SSS"
    MM_SS = "MM:SS"
    MM_SS_SSS = "mm:ss.SSS"
    SS = "SS"


TimeFormatter = Callable[[int], str]
FormatSpec = Union[TimeFormat, str, TimeFormatter]

DEFAULT_FORMAT = TimeFormat.MM_SS


def resolve_format(fmt: FormatSpec) -> TimeFormat | TimeFormatter:
    """Normalise *fmt* to a ``TimeFormat`` member or a callable.

    Raises ``ValueError`` for an unknown preset string.
    """
    if isinstance(fmt, TimeFormat) or callable(fmt):
        return fmt
    return TimeFormat(fmt)


def format_time(ms: int, fmt: FormatSpec = DEFAULT_FORMAT) -> str:
    fmt = resolve_format(fmt)
    if not isinstance(fmt, TimeFormat):
        return fmt(ms)

    d = decompose(max(0, ms))
    total_minutes = d.hours * 60 + d.minutes

    if fmt is TimeFormat.HH_MM_SS:
        return f"{d.hours}:{d.minutes:02d}:{d.seconds:02d}"
    if fmt is TimeFormat.HH_MM_SS_SSS:
        return f"{d.hours}:{d.minutes:02d}:{d.seconds:02d}.{d.milliseconds:03d}"
    if fmt is TimeFormat.MM_SS_SSS:
        return f"{total_minutes}:{d.seconds:02d}.{d.milliseconds:03d}"
    if fmt is TimeFormat.SS:
        return str(total_minutes * 60 + d.seconds)
    return f"{total_minutes}:{d.seconds:02d}"
