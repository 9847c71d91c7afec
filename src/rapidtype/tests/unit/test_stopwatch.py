import asyncio

import pytest

from rapidtype.logic.settings import EngineSettings
from rapidtype.logic.stopwatch import Stopwatch, monotonic_ms
from rapidtype.tests.helpers import FakeClock


class TestStopwatchTiming:
    def test_starts_at_zero_and_stopped(self, stopwatch):
        assert stopwatch.time_ms == 0
        assert stopwatch.is_running is False

    def test_measures_running_time(self, clock, stopwatch):
        stopwatch.start()
        clock.advance(1500)
        assert stopwatch.time_ms == 1500
        assert stopwatch.is_running is True

    def test_pause_does_not_accumulate(self, clock, stopwatch):
        stopwatch.start()
        clock.advance(1000)
        stopwatch.stop()
        clock.advance(500)
        stopwatch.start()
        clock.advance(1000)
        stopwatch.stop()

        assert stopwatch.time_ms == 2000

    def test_stopped_time_is_frozen(self, clock, stopwatch):
        stopwatch.start()
        clock.advance(300)
        stopwatch.stop()
        clock.advance(10_000)
        assert stopwatch.time_ms == 300

    def test_lap_does_not_stop(self, clock, stopwatch):
        stopwatch.start()
        clock.advance(250)
        assert stopwatch.lap() == 250
        clock.advance(250)
        assert stopwatch.lap() == 500
        assert stopwatch.is_running is True

    def test_lap_while_stopped_returns_elapsed(self, clock, stopwatch):
        stopwatch.start()
        clock.advance(700)
        stopwatch.stop()
        clock.advance(100)
        assert stopwatch.lap() == 700

    def test_reset_zeroes_and_stops(self, clock, stopwatch):
        stopwatch.start()
        clock.advance(900)
        stopwatch.reset()

        assert stopwatch.time_ms == 0
        assert stopwatch.is_running is False

        stopwatch.start()
        clock.advance(100)
        assert stopwatch.time_ms == 100


class TestStopwatchIdempotence:
    def test_start_while_running_keeps_reference(self, clock, stopwatch):
        stopwatch.start()
        clock.advance(400)
        stopwatch.start()
        clock.advance(100)
        assert stopwatch.time_ms == 500

    def test_stop_while_stopped_is_noop(self, clock, stopwatch):
        stopwatch.start()
        clock.advance(400)
        stopwatch.stop()
        clock.advance(100)
        stopwatch.stop()
        assert stopwatch.time_ms == 400


class TestStopwatchConstruction:
    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError, match="tick_interval_ms"):
            Stopwatch(tick_interval_ms=0)

    def test_from_settings_uses_tick_interval(self):
        stopwatch = Stopwatch.from_settings(EngineSettings(tick_interval_ms=25), clock=FakeClock())
        assert stopwatch._tick_interval_ms == 25

    def test_default_clock_is_monotonic_ms(self):
        first = monotonic_ms()
        assert isinstance(first, int)
        assert monotonic_ms() >= first


class TestStopwatchTick:
    def test_no_tick_without_event_loop(self, clock):
        ticks = []
        stopwatch = Stopwatch(clock, on_tick=ticks.append)
        stopwatch.start()

        assert stopwatch._tick_task is None
        clock.advance(50)
        assert stopwatch.time_ms == 50

    async def test_tick_reports_elapsed_time(self):
        ticked = asyncio.Event()
        ticks = []

        def on_tick(ms):
            ticks.append(ms)
            ticked.set()

        stopwatch = Stopwatch(tick_interval_ms=5, on_tick=on_tick)
        stopwatch.start()
        await asyncio.wait_for(ticked.wait(), timeout=1.0)
        stopwatch.stop()

        assert ticks
        assert all(ms >= 0 for ms in ticks)

    async def test_stop_cancels_tick(self):
        ticks = []
        stopwatch = Stopwatch(tick_interval_ms=5, on_tick=ticks.append)
        stopwatch.start()
        task = stopwatch._tick_task
        assert task is not None

        stopwatch.stop()
        await asyncio.sleep(0.05)

        assert task.done()
        assert stopwatch._tick_task is None
        count = len(ticks)
        await asyncio.sleep(0.03)
        assert len(ticks) == count

    async def test_reset_and_close_cancel_tick(self):
        stopwatch = Stopwatch(tick_interval_ms=5, on_tick=lambda _ms: None)
        stopwatch.start()
        first = stopwatch._tick_task
        stopwatch.reset()
        await asyncio.sleep(0)
        assert first is not None
        assert first.cancelled() or first.done()

        stopwatch.start()
        second = stopwatch._tick_task
        stopwatch.close()
        await asyncio.sleep(0)
        assert second is not None
        assert second.cancelled() or second.done()
        assert stopwatch.is_running is True  # close only releases the tick

    @pytest.mark.parametrize("error", [ValueError("boom"), KeyError("boom"), AttributeError("boom")])
    async def test_failing_callback_ends_tick_without_raising(self, error):
        def on_tick(_ms):
            raise error

        stopwatch = Stopwatch(tick_interval_ms=1, on_tick=on_tick)
        stopwatch.start()
        task = stopwatch._tick_task
        assert task is not None
        await asyncio.wait_for(task, timeout=1.0)

        assert task.exception() is None
        stopwatch.stop()
