"""Tests for angle/hour conversion and quarter-hour snapping."""

import pytest

from timedial.core.quantizer import (
    angle_to_hour,
    format_hour,
    hour_to_angle,
    snap_to_quarter_hour,
    wrap_duration,
)


class TestAngleToHour:
    def test_top_of_dial_is_midnight(self):
        assert angle_to_hour(-90.0) == 0.0

    def test_right_is_six(self):
        assert angle_to_hour(0.0) == 6.0

    def test_bottom_is_noon(self):
        assert angle_to_hour(90.0) == 12.0

    def test_left_is_eighteen(self):
        assert angle_to_hour(180.0) == 18.0
        assert angle_to_hour(-180.0) == 18.0

    def test_snaps_to_nearest_quarter(self):
        # 9.1h sits at 46.5 degrees
        assert angle_to_hour(46.5) == 9.0
        # 9.2h rounds up to 9.25
        assert angle_to_hour(48.0) == 9.25

    def test_just_before_midnight_wraps_to_zero(self):
        # 23.9h
        assert angle_to_hour(268.5) == 0.0
        assert angle_to_hour(-91.5) == 0.0

    @pytest.mark.parametrize("angle", [-179.0, -90.0, -1.0, 0.0, 33.3, 120.0, 179.9, 180.0])
    def test_result_is_quarter_hour_in_range(self, angle):
        hour = angle_to_hour(angle)
        assert 0 <= hour < 24
        assert (hour * 4) == int(hour * 4)


class TestSnapping:
    def test_half_way_rounds_up(self):
        assert snap_to_quarter_hour(9.125) == 9.25

    def test_idempotent(self):
        for raw in (0.0, 3.3, 9.125, 17.9, 23.88):
            once = snap_to_quarter_hour(raw)
            assert snap_to_quarter_hour(once) == once


class TestHourToAngle:
    def test_midnight_points_up(self):
        assert hour_to_angle(0.0) == -90.0

    def test_angles_are_normalized(self):
        assert hour_to_angle(18.0) == 180.0
        assert hour_to_angle(22.0) == -120.0

    def test_round_trip_every_quarter_hour(self):
        for step in range(96):
            hour = step / 4
            assert angle_to_hour(hour_to_angle(hour)) == hour


class TestWrapDuration:
    def test_plain_span(self):
        assert wrap_duration(9.0, 17.0) == 8.0

    def test_span_over_midnight(self):
        assert wrap_duration(22.0, 2.0) == 4.0

    def test_equal_endpoints_is_a_full_day(self):
        assert wrap_duration(5.0, 5.0) == 24.0


class TestFormatting:
    def test_format_hour(self):
        assert format_hour(0.0) == "00:00"
        assert format_hour(9.25) == "09:15"
        assert format_hour(10 + 10 / 60) == "10:10"
        assert format_hour(23.75) == "23:45"
