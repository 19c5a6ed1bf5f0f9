"""Tests for the interval and display-synced tick sources."""

import pytest
from PyQt6.QtCore import QEventLoop, QObject, QTimer, pyqtSignal

from countdown.timer.scheduler import (
    ElapsedClock,
    FrameScheduler,
    IntervalScheduler,
    create_scheduler,
)

from helpers import FakeClock


class FrameSource(QObject):
    """Stands in for QOpenGLWidget.frameSwapped."""

    frame = pyqtSignal()


def _spin(ms: int) -> None:
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


# ═══════════════════════════════════════════════════════════════════════════
#  FIXED INTERVAL
# ═══════════════════════════════════════════════════════════════════════════


class TestIntervalScheduler:

    def test_reports_nominal_period(self, qapp):
        sched = IntervalScheduler(10)
        ticks = []
        handle = sched.start(ticks.append)
        _spin(120)
        sched.stop(handle)

        assert ticks, "expected at least one tick in 120 ms"
        assert set(ticks) == {10}

    def test_no_ticks_after_stop(self, qapp):
        sched = IntervalScheduler(10)
        ticks = []
        handle = sched.start(ticks.append)
        sched.stop(handle)
        _spin(60)
        assert ticks == []

    def test_stop_is_idempotent(self, qapp):
        sched = IntervalScheduler(10)
        handle = sched.start(lambda elapsed: None)
        sched.stop(handle)
        sched.stop(handle)
        sched.stop(None)
        sched.stop(9999)
        assert sched.active_count == 0

    def test_tracks_active_subscriptions(self, qapp):
        sched = IntervalScheduler(50)
        a = sched.start(lambda elapsed: None)
        b = sched.start(lambda elapsed: None)
        assert a != b
        assert sched.active_count == 2
        sched.stop(a)
        assert sched.active_count == 1
        sched.stop(b)

    @pytest.mark.parametrize("bad", [0, -5])
    def test_rejects_non_positive_interval(self, qapp, bad):
        with pytest.raises(ValueError):
            IntervalScheduler(bad)


# ═══════════════════════════════════════════════════════════════════════════
#  DISPLAY SYNCED
# ═══════════════════════════════════════════════════════════════════════════


class TestFrameScheduler:

    def test_reports_measured_elapsed(self, qapp):
        source = FrameSource()
        clock = FakeClock(1000)
        sched = FrameScheduler(source.frame, clock=clock)
        ticks = []
        sched.start(ticks.append)

        for spacing in (16, 17, 33, 8):
            clock.advance(spacing)
            source.frame.emit()

        assert ticks == [16, 17, 33, 8]

    def test_first_frame_measured_from_subscription(self, qapp):
        source = FrameSource()
        clock = FakeClock(500)
        sched = FrameScheduler(source.frame, clock=clock)
        ticks = []
        clock.advance(100)  # before subscribing: not counted
        sched.start(ticks.append)
        clock.advance(20)
        source.frame.emit()
        assert ticks == [20]

    def test_stop_detaches_from_source(self, qapp):
        source = FrameSource()
        clock = FakeClock()
        sched = FrameScheduler(source.frame, clock=clock)
        ticks = []
        handle = sched.start(ticks.append)
        sched.stop(handle)
        sched.stop(handle)

        clock.advance(16)
        source.frame.emit()
        assert ticks == []
        assert sched.active_count == 0

    def test_subscriptions_measure_independently(self, qapp):
        source = FrameSource()
        clock = FakeClock()
        sched = FrameScheduler(source.frame, clock=clock)
        first, second = [], []
        sched.start(first.append)
        clock.advance(10)
        sched.start(second.append)
        clock.advance(16)
        source.frame.emit()
        assert first == [26]
        assert second == [16]

    def test_timer_fallback_ticks(self, qapp):
        sched = FrameScheduler()
        ticks = []
        handle = sched.start(ticks.append)
        _spin(150)
        sched.stop(handle)

        assert ticks
        assert all(t >= 0 for t in ticks)

    def test_frame_period_is_positive(self, qapp):
        assert FrameScheduler.frame_period_ms() >= 1


class TestCreateScheduler:

    def test_interval_by_default(self, qapp):
        sched = create_scheduler(250)
        assert isinstance(sched, IntervalScheduler)
        assert sched.interval_ms == 250

    def test_display_sync_ignores_interval(self, qapp):
        assert isinstance(create_scheduler(-1, sync_to_display=True), FrameScheduler)

    def test_only_frame_scheduler_measures_elapsed(self, qapp):
        assert FrameScheduler.measures_elapsed
        assert not IntervalScheduler.measures_elapsed


class TestElapsedClock:

    def test_never_decreases(self, qapp):
        clock = ElapsedClock()
        first = clock()
        _spin(20)
        second = clock()
        assert first >= 0
        assert second >= first + 10

    def test_frame_scheduler_defaults_to_elapsed_clock(self, qapp):
        sched = FrameScheduler()
        assert isinstance(sched._clock, ElapsedClock)
