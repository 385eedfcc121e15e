"""
Tests for the frame/timer scheduler and clocks.
"""

import pytest

from frigate_hop.core.scheduler import ManualClock, RealClock, Scheduler


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)


class TestClocks:
    """Test clock implementations."""

    def test_manual_clock_advances(self, clock):
        assert clock.now() == 0.0
        clock.advance(0.5)
        clock.advance(0.25)
        assert clock.now() == pytest.approx(0.75)

    def test_manual_clock_rejects_negative(self, clock):
        with pytest.raises(ValueError):
            clock.advance(-1.0)

    def test_real_clock_monotonic(self):
        clock = RealClock()
        first = clock.now()
        assert clock.now() >= first


class TestFrames:
    """Test frame requests."""

    def test_frame_runs_on_pump(self, scheduler):
        calls = []
        scheduler.request_frame(lambda: calls.append("frame"))

        assert calls == []
        assert scheduler.pump() == 1
        assert calls == ["frame"]

    def test_frame_requested_during_pump_waits(self, scheduler):
        """A frame requested from a frame callback runs on the next pump."""
        calls = []

        def frame():
            calls.append(len(calls))
            scheduler.request_frame(frame)

        scheduler.request_frame(frame)
        scheduler.pump()
        scheduler.pump()

        assert calls == [0, 1]

    def test_cancelled_frame_skipped(self, scheduler):
        calls = []
        task = scheduler.request_frame(lambda: calls.append(1))

        assert task.cancel()
        assert not task.cancel()
        scheduler.pump()

        assert calls == []
        assert task.cancelled


class TestTimers:
    """Test deferred callbacks."""

    def test_fires_at_due_time(self, scheduler, clock):
        calls = []
        task = scheduler.call_later(1.0, lambda: calls.append("timer"))

        clock.advance(0.5)
        scheduler.pump()
        assert calls == []

        clock.advance(0.5)
        scheduler.pump()
        assert calls == ["timer"]
        assert task.fired

    def test_fires_once(self, scheduler, clock):
        calls = []
        scheduler.call_later(0.1, lambda: calls.append(1))

        clock.advance(1.0)
        scheduler.pump()
        scheduler.pump()

        assert calls == [1]
        assert scheduler.pending_timers == 0

    def test_timers_run_before_frames(self, scheduler, clock):
        order = []
        scheduler.request_frame(lambda: order.append("frame"))
        scheduler.call_later(0.0, lambda: order.append("timer"))

        scheduler.pump()

        assert order == ["timer", "frame"]

    def test_due_order(self, scheduler, clock):
        order = []
        scheduler.call_later(0.3, lambda: order.append("late"))
        scheduler.call_later(0.1, lambda: order.append("early"))

        clock.advance(1.0)
        scheduler.run_due_timers()

        assert order == ["early", "late"]

    def test_cancel_all(self, scheduler, clock):
        calls = []
        scheduler.call_later(0.1, lambda: calls.append("timer"))
        scheduler.request_frame(lambda: calls.append("frame"))

        scheduler.cancel_all()
        clock.advance(1.0)

        assert scheduler.pump() == 0
        assert calls == []
