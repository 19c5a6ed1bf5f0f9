"""Tick sources for the timer engine.

Two strategies share one tiny contract::

    handle = scheduler.start(on_tick)   # on_tick(elapsed_ms: int)
    scheduler.stop(handle)              # idempotent, never raises

IntervalScheduler
    A ``QTimer`` fires every *interval_ms*; each call reports the
    nominal period.
FrameScheduler
    Called once per display frame, either from a frame signal such as
    ``QOpenGLWidget.frameSwapped`` or from a timer running at the screen
    refresh rate.  Frame spacing varies, so each call reports the
    measured elapsed time since the previous frame.

The engine only ever talks to the base ``Scheduler`` interface, so tests
can swap in a manually driven fake.
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable

from PyQt6.QtCore import QCoreApplication, QElapsedTimer, QObject, Qt, QTimer
from PyQt6.QtGui import QGuiApplication


logger = logging.getLogger(__name__)

TickCallback = Callable[[int], None]
Clock = Callable[[], int]

DEFAULT_INTERVAL_MS = 100
FALLBACK_REFRESH_HZ = 60.0


class ElapsedClock:
    """Monotonic millisecond clock backed by a running ``QElapsedTimer``.

    Readings count from construction and never decrease.
    """

    def __init__(self) -> None:
        self._timer = QElapsedTimer()
        self._timer.start()

    def __call__(self) -> int:
        return self._timer.elapsed()


# ── base ──────────────────────────────────────────────────────────────────


class Scheduler(QObject):
    """Periodic notification source.  Subclasses own their handles.

    ``measures_elapsed`` is true when tick values are measured wall-clock
    spacing rather than a nominal period.
    """

    measures_elapsed = False

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._tokens = itertools.count(1)

    def start(self, on_tick: TickCallback) -> int:
        raise NotImplementedError

    def stop(self, handle: int | None) -> None:
        raise NotImplementedError

    def _next_token(self) -> int:
        return next(self._tokens)


# ── fixed interval ────────────────────────────────────────────────────────


class IntervalScheduler(Scheduler):
    def __init__(
        self,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._interval_ms = interval_ms
        self._timers: dict[int, QTimer] = {}

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def active_count(self) -> int:
        return len(self._timers)

    def start(self, on_tick: TickCallback) -> int:
        token = self._next_token()
        timer = QTimer(self)
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        timer.setInterval(self._interval_ms)
        timer.timeout.connect(lambda: on_tick(self._interval_ms))
        self._timers[token] = timer
        timer.start()
        logger.debug("interval subscription %d started (%d ms)", token, self._interval_ms)
        return token

    def stop(self, handle: int | None) -> None:
        timer = self._timers.pop(handle, None)
        if timer is None:
            return
        timer.stop()
        timer.deleteLater()
        logger.debug("interval subscription %d stopped", handle)


# ── display synced ────────────────────────────────────────────────────────


class _FrameSubscription:
    __slots__ = ("on_frame", "last_ms", "timer")

    def __init__(self, last_ms: int) -> None:
        self.on_frame: Callable[[], None] | None = None
        self.last_ms = last_ms
        self.timer: QTimer | None = None


class FrameScheduler(Scheduler):
    """Once-per-frame ticks carrying the measured frame spacing.

    *frame_source* is any bound signal emitted once per presented frame.
    Without one, a precise ``QTimer`` runs at the primary screen's
    refresh period (60 Hz when no screen is available).
    """

    measures_elapsed = True

    def __init__(
        self,
        frame_source=None,
        clock: Clock | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._frame_source = frame_source
        self._clock: Clock = clock or ElapsedClock()
        self._subs: dict[int, _FrameSubscription] = {}

    @property
    def active_count(self) -> int:
        return len(self._subs)

    @staticmethod
    def frame_period_ms() -> int:
        rate = FALLBACK_REFRESH_HZ
        app = QCoreApplication.instance()
        if isinstance(app, QGuiApplication):
            screen = app.primaryScreen()
            if screen is not None and screen.refreshRate() > 0:
                rate = screen.refreshRate()
        return max(1, round(1000 / rate))

    def start(self, on_tick: TickCallback) -> int:
        token = self._next_token()
        sub = _FrameSubscription(self._clock())

        def on_frame() -> None:
            now = self._clock()
            elapsed = max(0, now - sub.last_ms)
            sub.last_ms = now
            on_tick(elapsed)

        sub.on_frame = on_frame
        if self._frame_source is not None:
            self._frame_source.connect(on_frame)
        else:
            sub.timer = QTimer(self)
            sub.timer.setTimerType(Qt.TimerType.PreciseTimer)
            sub.timer.setInterval(self.frame_period_ms())
            sub.timer.timeout.connect(on_frame)
            sub.timer.start()

        self._subs[token] = sub
        logger.debug("frame subscription %d started", token)
        return token

    def stop(self, handle: int | None) -> None:
        sub = self._subs.pop(handle, None)
        if sub is None:
            return
        if sub.timer is not None:
            sub.timer.stop()
            sub.timer.deleteLater()
        else:
            try:
                self._frame_source.disconnect(sub.on_frame)
            except (TypeError, RuntimeError):
                # Source already torn down; nothing left to detach from.
                logger.debug("frame source gone before subscription %d", handle)
        logger.debug("frame subscription %d stopped", handle)


def create_scheduler(
    interval_ms: int = DEFAULT_INTERVAL_MS,
    sync_to_display: bool = False,
    parent: QObject | None = None,
) -> Scheduler:
    """Pick the tick strategy.  *interval_ms* is ignored when display-synced."""
    if sync_to_display:
        return FrameScheduler(parent=parent)
    return IntervalScheduler(interval_ms, parent=parent)
