"""Millisecond arithmetic for the countdown timer.

``decompose`` splits a duration into hours / minutes / seconds /
milliseconds; ``to_ms`` puts it back together.  The pair obeys the
round-trip law ``to_ms(decompose(x)) == x`` for every non-negative int.

Negative durations are out of contract; the engine clamps before
calling in here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ── constants ─────────────────────────────────────────────────────────────

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE


class TimeUnit(Enum):
    MS = "ms"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"


_MULTIPLIERS: dict[TimeUnit, int] = {
    TimeUnit.MS: 1,
    TimeUnit.SECONDS: MS_PER_SECOND,
    TimeUnit.MINUTES: MS_PER_MINUTE,
    TimeUnit.HOURS: MS_PER_HOUR,
}


# ── decomposition ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DecomposedTime:
    """A duration split into clock fields.  ``hours`` is unbounded."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0


def decompose(ms: int | float) -> DecomposedTime:
    """Split *ms* into hours, minutes, seconds and milliseconds.

    Fractional input is floored to whole milliseconds.
    """
    total = int(ms)
    hours, rem = divmod(total, MS_PER_HOUR)
    minutes, rem = divmod(rem, MS_PER_MINUTE)
    seconds, milliseconds = divmod(rem, MS_PER_SECOND)
    return DecomposedTime(hours, minutes, seconds, milliseconds)


# Reads better next to ``to_ms`` at call sites.
from_ms = decompose


def to_ms(d: DecomposedTime) -> int:
    return (
        d.hours * MS_PER_HOUR
        + d.minutes * MS_PER_MINUTE
        + d.seconds * MS_PER_SECOND
        + d.milliseconds
    )


# ── unit conversion ───────────────────────────────────────────────────────


def convert_to_ms(value: float, unit: TimeUnit) -> int:
    """Convert *value* in *unit* to whole milliseconds (minimum 0)."""
    return max(0, int(value * _MULTIPLIERS[TimeUnit(unit)] // 1))


def convert_from_ms(ms: float, unit: TimeUnit) -> float:
    return ms / _MULTIPLIERS[TimeUnit(unit)]


def seconds(n: float) -> int:
    return convert_to_ms(n, TimeUnit.SECONDS)


def minutes(n: float) -> int:
    return convert_to_ms(n, TimeUnit.MINUTES)


def hours(n: float) -> int:
    return convert_to_ms(n, TimeUnit.HOURS)
