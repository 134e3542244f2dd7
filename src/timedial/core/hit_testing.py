"""Endpoint hit-testing against the ranges on the dial."""

from __future__ import annotations

from typing import Sequence

from .models import Endpoint, EndpointHit, TimeRange
from .quantizer import HOURS_PER_DAY, angle_to_hour


def circular_distance(a: float, b: float) -> float:
    """Shortest distance in hours between two points on the 24-hour circle."""
    delta = abs(a - b)
    return min(delta, abs(delta - HOURS_PER_DAY))


def find_nearest_endpoint(
    angle: float,
    ranges: Sequence[TimeRange],
    tolerance_hours: float,
) -> EndpointHit | None:
    """Return the first endpoint within ``tolerance_hours`` of ``angle``.

    Ranges are scanned in insertion order and each range's start is checked
    before its end; the first match wins even when a later endpoint is closer.
    ``None`` means the pointer is not near any endpoint.
    """
    clicked = angle_to_hour(angle)
    for index, time_range in enumerate(ranges):
        for which in (Endpoint.START, Endpoint.END):
            if circular_distance(clicked, time_range.endpoint(which)) <= tolerance_hours:
                return EndpointHit(index=index, which=which)
    return None


def select_tolerance(
    surface_width: int,
    compact_width: int,
    compact_tolerance: float,
    default_tolerance: float,
) -> float:
    """Pick the touch-friendly tolerance for surfaces narrower than ``compact_width``."""
    if surface_width < compact_width:
        return compact_tolerance
    return default_tolerance
