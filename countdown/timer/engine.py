"""Countdown state machine.

States
------
IDLE       Not counting: freshly built, reset, or stopped.
RUNNING    Counting down; exactly one scheduler subscription is live.
PAUSED     Frozen mid-countdown; remaining time is kept.
FINISHED   Remaining time hit zero (never observed in loop mode).

Transitions
-----------
IDLE | PAUSED | FINISHED → RUNNING      (start / toggle)
RUNNING → PAUSED                        (pause / toggle)
RUNNING | PAUSED → IDLE                 (stop)
RUNNING → FINISHED                      (countdown reaches 0)
FINISHED → PAUSED                       (add_time)
Any → IDLE                              (reset / restart)

Every control is total: calling one from a state where it has nothing
to do is a silent no-op, never an exception.

``time``, ``progress`` and the ``is_*`` flags are computed from
``remaining``/``total_ms``/``status`` on every read and never cached.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import partial
from typing import Callable

from PyQt6.QtCore import QCoreApplication, QObject, Qt, pyqtSignal
from PyQt6.QtGui import QGuiApplication

from .formatting import DEFAULT_FORMAT, FormatSpec, format_time, resolve_format
from .scheduler import (
    DEFAULT_INTERVAL_MS,
    Clock,
    ElapsedClock,
    Scheduler,
    create_scheduler,
)
from .timeutils import DecomposedTime, decompose


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt countdown timer with pause/resume, looping and time mutation.

    Signals
    -------
    tick(remaining_ms: int)
        Emitted after every consumed scheduler tick.
    state_changed(new_status: TimerStatus)
        Emitted on every status transition.
    started()
        Fresh start only, not resume-from-pause.
    paused(), stopped(), timer_reset()
        Emitted by the matching control.
    completed()
        Countdown reached zero.  In loop mode this fires once per lap.

    The ``on_*`` keyword callbacks are connected to these signals before
    ``auto_start`` is honoured.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    started = pyqtSignal()
    paused = pyqtSignal()
    stopped = pyqtSignal()
    timer_reset = pyqtSignal()
    completed = pyqtSignal()

    def __init__(
        self,
        total_ms: int,
        parent: QObject | None = None,
        *,
        interval: int = DEFAULT_INTERVAL_MS,
        time_format: FormatSpec = DEFAULT_FORMAT,
        auto_start: bool = False,
        loop: bool = False,
        sync_to_display: bool = False,
        scheduler: Scheduler | None = None,
        clock: Clock | None = None,
        on_complete: Callable[[], None] | None = None,
        on_tick: Callable[[int], None] | None = None,
        on_start: Callable[[], None] | None = None,
        on_pause: Callable[[], None] | None = None,
        on_reset: Callable[[], None] | None = None,
        on_stop: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(parent)

        if total_ms < 0:
            raise ValueError(f"total_ms must be >= 0, got {total_ms}")

        # ── configuration ─────────────────────────────────────────────
        self._format = resolve_format(time_format)
        self._loop: bool = loop
        self._scheduler: Scheduler = scheduler or create_scheduler(
            interval, sync_to_display, parent=self,
        )
        self._clock: Clock = clock or ElapsedClock()

        # ── countdown state ───────────────────────────────────────────
        self._total_ms: int = int(total_ms)
        self._remaining: int = self._total_ms
        self._status: TimerStatus = TimerStatus.IDLE
        self._last_tick_at: int | None = None

        # ── subscription ──────────────────────────────────────────────
        self._handle: int | None = None
        self._generation: int = 0

        for signal, slot in (
            (self.completed, on_complete),
            (self.tick, on_tick),
            (self.started, on_start),
            (self.paused, on_pause),
            (self.timer_reset, on_reset),
            (self.stopped, on_stop),
        ):
            if slot is not None:
                signal.connect(slot)

        app = QCoreApplication.instance()
        if isinstance(app, QGuiApplication):
            app.applicationStateChanged.connect(self._on_application_state_changed)

        if auto_start:
            self.start()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def status(self) -> TimerStatus:
        return self._status

    @property
    def remaining(self) -> int:
        """Milliseconds left on the clock."""
        return self._remaining

    @property
    def total_ms(self) -> int:
        return self._total_ms

    @property
    def time(self) -> str:
        """``remaining`` rendered with the configured format."""
        return format_time(self._remaining, self._format)

    @property
    def progress(self) -> float:
        """0 → 100 progress through the countdown."""
        if self._total_ms <= 0:
            return 0.0
        elapsed = self._total_ms - self._remaining
        return max(0.0, min(100.0, 100.0 * elapsed / self._total_ms))

    @property
    def decomposed(self) -> DecomposedTime:
        return decompose(self._remaining)

    @property
    def hours(self) -> int:
        return self.decomposed.hours

    @property
    def minutes(self) -> int:
        return self.decomposed.minutes

    @property
    def seconds(self) -> int:
        return self.decomposed.seconds

    @property
    def milliseconds(self) -> int:
        return self.decomposed.milliseconds

    @property
    def is_running(self) -> bool:
        return self._status == TimerStatus.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._status == TimerStatus.PAUSED

    @property
    def is_finished(self) -> bool:
        return self._status == TimerStatus.FINISHED

    @property
    def is_idle(self) -> bool:
        return self._status == TimerStatus.IDLE

    @property
    def last_tick_at(self) -> int | None:
        """Clock reading of the last consumed tick; ``None`` unless running."""
        return self._last_tick_at

    @property
    def loop(self) -> bool:
        return self._loop

    @loop.setter
    def loop(self, value: bool) -> None:
        self._loop = value

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start fresh, or resume when paused.  No-op while running."""
        if self._status == TimerStatus.RUNNING:
            return

        resuming = self._status == TimerStatus.PAUSED
        if self._status == TimerStatus.FINISHED:
            self._remaining = self._total_ms
        if self._remaining <= 0:
            return  # nothing to count down

        self._subscribe()
        self._set_status(TimerStatus.RUNNING)
        if not resuming:
            self.started.emit()

    def pause(self) -> None:
        if self._status != TimerStatus.RUNNING:
            return
        self._unsubscribe()
        self._set_status(TimerStatus.PAUSED)
        self.paused.emit()

    def stop(self) -> None:
        """Halt counting, keep the remainder, and go back to IDLE."""
        if self._status not in (TimerStatus.RUNNING, TimerStatus.PAUSED):
            return
        self._unsubscribe()
        self._set_status(TimerStatus.IDLE)
        self.stopped.emit()

    def reset(self, total_ms: int | None = None) -> None:
        """Refill to the full duration and go IDLE.

        Passing *total_ms* adopts a new full duration first.
        """
        if total_ms is not None:
            if total_ms < 0:
                raise ValueError(f"total_ms must be >= 0, got {total_ms}")
            self._total_ms = int(total_ms)
        self._unsubscribe()
        self._remaining = self._total_ms
        self._set_status(TimerStatus.IDLE)
        self.timer_reset.emit()

    def restart(self) -> None:
        self.reset()
        self.start()

    def toggle(self) -> None:
        if self._status == TimerStatus.RUNNING:
            self.pause()
        else:
            self.start()

    def add_time(self, ms: int) -> None:
        """Extend the countdown.

        ``total_ms`` grows along with ``remaining`` when the new remainder
        would exceed it.  A finished timer given time back becomes PAUSED
        and waits for an explicit ``start``.
        """
        if ms < 0:
            self.subtract_time(-ms)
            return
        self._remaining += int(ms)
        self._total_ms = max(self._total_ms, self._remaining)
        if self._status == TimerStatus.FINISHED and self._remaining > 0:
            self._set_status(TimerStatus.PAUSED)

    def subtract_time(self, ms: int) -> None:
        if ms < 0:
            self.add_time(-ms)
            return
        self._remaining = max(0, self._remaining - int(ms))
        if self._remaining == 0:
            self._reach_zero()

    def set_time(self, ms: int) -> None:
        self._remaining = max(0, int(ms))
        self._total_ms = max(self._total_ms, self._remaining)
        if self._remaining == 0:
            self._reach_zero()
        elif self._status == TimerStatus.FINISHED:
            self._set_status(TimerStatus.IDLE)

    def resync(self) -> None:
        """Deduct wall-clock time the scheduler failed to report.

        A fixed-interval scheduler reports its nominal period, so a timer
        throttled while the app sat in the background falls behind.  The
        gap between ``clock()`` and ``last_tick_at`` is consumed as one
        tick, which may complete (or lap) the countdown.  Display-synced
        schedulers already measure real spacing and are left alone.
        """
        if self._status != TimerStatus.RUNNING or self._last_tick_at is None:
            return
        if self._scheduler.measures_elapsed:
            return
        behind = self._clock() - self._last_tick_at
        if behind > 0:
            logger.debug("resync: %d ms unaccounted for", behind)
            self._on_tick(behind)

    def dispose(self) -> None:
        """Tear down: drop the subscription without firing callbacks."""
        app = QCoreApplication.instance()
        if isinstance(app, QGuiApplication):
            try:
                app.applicationStateChanged.disconnect(
                    self._on_application_state_changed
                )
            except (TypeError, RuntimeError):
                logger.debug("application state slot already disconnected")
        self._unsubscribe()
        if self._status in (TimerStatus.RUNNING, TimerStatus.PAUSED):
            self._set_status(TimerStatus.IDLE)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: tick mechanics
    # ══════════════════════════════════════════════════════════════════

    def _subscribe(self) -> None:
        self._unsubscribe()
        self._generation += 1
        self._last_tick_at = self._clock()
        self._handle = self._scheduler.start(
            partial(self._on_tick, generation=self._generation)
        )

    def _unsubscribe(self) -> None:
        handle, self._handle = self._handle, None
        self._last_tick_at = None
        if handle is not None:
            self._scheduler.stop(handle)

    def _on_tick(self, elapsed_ms: int, generation: int | None = None) -> None:
        # Ticks can still arrive from a subscription we already dropped.
        if self._status != TimerStatus.RUNNING:
            return
        if generation is not None and generation != self._generation:
            return

        elapsed_ms = max(0, int(elapsed_ms))
        overshoot = max(0, elapsed_ms - self._remaining)
        self._remaining = max(0, self._remaining - elapsed_ms)
        self._last_tick_at = self._clock()
        self.tick.emit(self._remaining)

        if self._status != TimerStatus.RUNNING:
            # A tick slot paused or stopped us; hitting 0 still finishes.
            if self._remaining == 0:
                self._reach_zero()
            return
        if self._remaining == 0:
            self._complete(overshoot)

    def _on_application_state_changed(self, state: Qt.ApplicationState) -> None:
        if state == Qt.ApplicationState.ApplicationActive:
            self.resync()

    def _reach_zero(self) -> None:
        """Remaining was forced to 0 by a mutation."""
        if self._status == TimerStatus.RUNNING:
            self._complete(0)
        elif self._status != TimerStatus.FINISHED:
            self._set_status(TimerStatus.FINISHED)

    def _complete(self, overshoot: int) -> None:
        if self._loop and self._total_ms > 0:
            laps, carry = divmod(overshoot, self._total_ms)
            self._remaining = self._total_ms - carry
            logger.debug("lap complete, %d ms carried over", carry)
            for _ in range(laps + 1):
                self.completed.emit()
                if self._status != TimerStatus.RUNNING:
                    break
            return

        self._unsubscribe()
        self._remaining = 0
        self._set_status(TimerStatus.FINISHED)
        self.completed.emit()

    def _set_status(self, new_status: TimerStatus) -> None:
        logger.debug("timer %s -> %s", self._status.value, new_status.value)
        self._status = new_status
        self.state_changed.emit(new_status)
