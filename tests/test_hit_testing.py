"""Tests for endpoint hit-testing."""

from timedial.core.hit_testing import circular_distance, find_nearest_endpoint, select_tolerance
from timedial.core.models import Endpoint, EndpointHit, TimeRange
from timedial.core.quantizer import hour_to_angle


def test_circular_distance_wraps():
    assert circular_distance(23.75, 0.25) == 0.5
    assert circular_distance(9.0, 17.0) == 8.0
    assert circular_distance(1.0, 13.0) == 12.0


def test_hit_near_start():
    ranges = [TimeRange(9.0, 17.0)]
    # 9.1h
    assert find_nearest_endpoint(46.5, ranges, 0.5) == EndpointHit(0, Endpoint.START)


def test_tolerance_is_inclusive():
    ranges = [TimeRange(9.0, 17.0)]
    assert find_nearest_endpoint(hour_to_angle(17.5), ranges, 0.5) == EndpointHit(0, Endpoint.END)
    assert find_nearest_endpoint(hour_to_angle(17.75), ranges, 0.5) is None


def test_miss_returns_none():
    assert find_nearest_endpoint(hour_to_angle(12.0), [TimeRange(9.0, 17.0)], 0.5) is None
    assert find_nearest_endpoint(hour_to_angle(12.0), [], 0.5) is None


def test_first_match_wins_in_insertion_order():
    ranges = [TimeRange(1.0, 8.5), TimeRange(9.0, 17.0)]
    # 8.75h is within tolerance of both range 0 end and range 1 start.
    assert find_nearest_endpoint(hour_to_angle(8.75), ranges, 0.5) == EndpointHit(0, Endpoint.END)


def test_start_checked_before_end():
    ranges = [TimeRange(12.0, 12.25)]
    assert find_nearest_endpoint(hour_to_angle(12.25), ranges, 0.5) == EndpointHit(0, Endpoint.START)


def test_hit_across_midnight():
    ranges = [TimeRange(22.0, 0.0)]
    assert find_nearest_endpoint(hour_to_angle(23.75), ranges, 0.5) == EndpointHit(0, Endpoint.END)


def test_select_tolerance():
    assert select_tolerance(400, 600, 1.0, 0.5) == 1.0
    assert select_tolerance(600, 600, 1.0, 0.5) == 0.5
    assert select_tolerance(1200, 600, 1.0, 0.5) == 0.5
