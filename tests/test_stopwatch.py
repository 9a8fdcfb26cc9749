from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from timelib.bench.stopwatch import Stopwatch, repeat_n_times, time
from timelib.clock.sources import ManualClock
from timelib.clock.timevalue import TimeValue
from timelib.format.duration import DisplayMode, Duration, Formattable, PrintMode


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


def record(stopwatch: Stopwatch, clock: ManualClock, steps) -> None:
    for step in steps:
        clock.advance(step)
        stopwatch.round()


def test_rounds_sum_to_total(clock):
    stopwatch = Stopwatch(clock=clock)
    record(stopwatch, clock, [100, 200, 300])
    assert len(stopwatch) == 3
    assert [d.value for d in stopwatch.rounds] == [TimeValue(0, 100), TimeValue(0, 200), TimeValue(0, 300)]
    assert stopwatch.total() == sum(stopwatch.rounds)
    assert stopwatch.total().value == TimeValue(0, 600)


def test_round_returns_recorded_duration(clock):
    stopwatch = Stopwatch(clock=clock)
    clock.advance(0.25)
    duration = stopwatch.round()
    assert duration == stopwatch[0] == stopwatch.last_round()
    assert duration.count() == pytest.approx(0.25)


def test_mean(clock):
    stopwatch = Stopwatch(clock=clock)
    record(stopwatch, clock, [0.1, 0.1, 0.1, 0.1])
    assert stopwatch.mean().count() == pytest.approx(stopwatch.total().count() / 4)
    assert stopwatch.mean().value == TimeValue(0, 100_000_000)


def test_mean_without_rounds_fails(clock):
    with pytest.raises(ValueError):
        Stopwatch(clock=clock).mean()


def test_start_drops_the_running_interval(clock):
    stopwatch = Stopwatch(clock=clock)
    record(stopwatch, clock, [10])
    clock.advance(5_000)
    stopwatch.start()
    clock.advance(20)
    stopwatch.round()
    assert [d.value.to_nanoseconds() for d in stopwatch] == [10, 20]
    assert stopwatch.total().value == TimeValue(0, 30)


def test_reset_clears_history(clock):
    stopwatch = Stopwatch(clock=clock)
    record(stopwatch, clock, [10, 20])
    clock.advance(99)
    stopwatch.reset()
    assert len(stopwatch) == 0
    assert stopwatch.total().value == TimeValue.zero()
    clock.advance(7)
    assert stopwatch.round().value == TimeValue(0, 7)


def test_last_round_without_rounds_is_live(clock):
    stopwatch = Stopwatch(clock=clock)
    clock.advance(250)
    assert stopwatch.last_round().value == TimeValue(0, 250)
    clock.advance(250)
    assert stopwatch.last_round().value == TimeValue(0, 500)
    assert len(stopwatch) == 0


def test_out_of_range_index(clock):
    stopwatch = Stopwatch(clock=clock)
    record(stopwatch, clock, [1, 2, 3])
    for index in range(len(stopwatch), len(stopwatch) + 5):
        with pytest.raises(IndexError):
            stopwatch[index]
    with pytest.raises(IndexError):
        stopwatch[-4]
    assert stopwatch[-1].value == TimeValue(0, 3)


def test_set_print_mode_propagates(clock):
    stopwatch = Stopwatch("human", clock=clock)
    record(stopwatch, clock, [3661.0, 1.0])
    stopwatch.set_print_mode("numeric")
    assert all(d.display.kind is PrintMode.NUMERIC for d in stopwatch.rounds)
    assert stopwatch.total().display == DisplayMode.numeric()
    assert stopwatch[0].to_string() == "1.1.1.0.0.0"
    clock.advance(2.0)
    assert stopwatch.round().display == DisplayMode.numeric()


def test_set_format_switches_to_custom(clock):
    stopwatch = Stopwatch(clock=clock)
    record(stopwatch, clock, [61.0])
    stopwatch.set_format("%M min %s sec")
    assert stopwatch[0].to_string() == "1 min 1 sec"
    assert stopwatch.to_string() == "1 min 1 sec"
    assert stopwatch.display == DisplayMode.custom("%M min %s sec")


def test_to_string(clock):
    stopwatch = Stopwatch("numeric", clock=clock)
    clock.advance(1.0)
    assert stopwatch.to_string() == "0.0.1.0.0.0"
    stopwatch.round()
    clock.advance(1.0)
    stopwatch.round()
    assert str(stopwatch) == "0.0.2.0.0.0"
    assert isinstance(stopwatch, Formattable)


def test_measure_records_round_even_on_error(clock):
    stopwatch = Stopwatch(clock=clock)
    with stopwatch.measure():
        clock.advance(40)
    with pytest.raises(RuntimeError):
        with stopwatch.measure():
            clock.advance(60)
            raise RuntimeError("boom")
    assert [d.value.to_nanoseconds() for d in stopwatch] == [40, 60]


def test_time_helper(clock):
    calls = []

    def work():
        calls.append(1)
        clock.advance(1_000)

    stopwatch = Stopwatch(clock=clock)
    record(stopwatch, clock, [5])
    assert time(stopwatch, work) is stopwatch
    assert calls == [1]
    assert len(stopwatch) == 1
    assert stopwatch.total().value == TimeValue(0, 1_000)


def test_repeat_n_times(clock):
    stopwatch = Stopwatch(clock=clock)
    repeat_n_times(stopwatch, lambda: clock.advance(1_000), 5)
    assert len(stopwatch) == 5
    assert stopwatch.total().value == TimeValue(0, 5_000)
    assert stopwatch.mean() == Duration(TimeValue(0, 1_000))
    with pytest.raises(ValueError):
        repeat_n_times(stopwatch, lambda: None, -1)


def test_summary(clock):
    stopwatch = Stopwatch("numeric", clock=clock)
    assert stopwatch.summary().mean is None
    record(stopwatch, clock, [1.0, 3.0])
    summary = stopwatch.summary()
    assert len(summary.rounds) == 2
    assert summary.total.seconds == 4
    assert summary.mean.text == "0.0.2.0.0.0"


def test_real_clock_rounds_are_non_negative():
    stopwatch = Stopwatch()
    sum(range(1000))
    first = stopwatch.round()
    second = stopwatch.round()
    assert first.value >= TimeValue.zero()
    assert second.value >= TimeValue.zero()
    assert stopwatch.total() == first + second


def test_format_survives_mode_switches(clock):
    stopwatch = Stopwatch("human", "%s sec", clock=clock)
    clock.advance(2.0)
    stopwatch.round()
    assert stopwatch[0].to_string() == "  2s "
    stopwatch.set_print_mode("custom")
    assert stopwatch[0].to_string() == "2 sec"
    stopwatch.set_format("%m ms")
    stopwatch.set_print_mode("numeric")
    stopwatch.set_print_mode("custom")
    assert stopwatch.total().to_string() == "0 ms"
    assert stopwatch.display == DisplayMode.custom("%m ms")
