"""Tests for the arc geometry used when painting ranges."""

from timedial.core.models import TimeRange
from timedial.ui.dial_painter import range_arc


def test_arc_starts_at_range_start_bearing():
    # 09:00 sits 45 degrees below 3 o'clock.
    assert range_arc(TimeRange(9.0, 17.0)) == (45.0, 120.0)


def test_midnight_arc_starts_straight_up():
    assert range_arc(TimeRange(0.0, 6.0)) == (-90.0, 90.0)


def test_overnight_arc_sweeps_through_midnight():
    start, sweep = range_arc(TimeRange(22.0, 2.0))
    assert start == -120.0
    assert sweep == 60.0
