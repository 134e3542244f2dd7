"""Conversions between dial angles and quarter-hour time values.

Angles are the raw bearings produced by ``atan2`` on screen coordinates: 0° points
right and values increase clockwise because the y axis grows downwards. The dial
places hour 0 at -90° (straight up), so one hour spans 15°.
"""

from __future__ import annotations

import math

HOURS_PER_DAY = 24
DEGREES_PER_HOUR = 360 / HOURS_PER_DAY
QUARTERS_PER_HOUR = 4
QUARTER_HOUR = 1 / QUARTERS_PER_HOUR
ZERO_HOUR_ANGLE = -90.0


def snap_to_quarter_hour(hour: float) -> float:
    """Round ``hour`` half-up to the nearest 0.25 and keep it inside ``[0, 24)``."""
    snapped = math.floor(hour * QUARTERS_PER_HOUR + 0.5) / QUARTERS_PER_HOUR
    snapped %= HOURS_PER_DAY
    # 23.9 rounds up to 24.0 which is the same instant as midnight.
    if snapped >= HOURS_PER_DAY:
        snapped = 0.0
    return snapped


def angle_to_hour(angle: float) -> float:
    hour = ((angle - ZERO_HOUR_ANGLE) * HOURS_PER_DAY / 360) % HOURS_PER_DAY
    return snap_to_quarter_hour(hour)


def hour_to_angle(hour: float) -> float:
    """Return the canonical pointer angle for ``hour``, normalized to ``(-180, 180]``."""
    angle = hour * DEGREES_PER_HOUR + ZERO_HOUR_ANGLE
    if angle > 180:
        angle -= 360
    elif angle <= -180:
        angle += 360
    return angle


def wrap_duration(start: float, end: float) -> float:
    """Clockwise span from ``start`` to ``end``; non-positive spans wrap past midnight."""
    delta = end - start
    if delta > 0:
        return delta
    return delta + HOURS_PER_DAY


def format_hour(hour: float) -> str:
    hours = int(math.floor(hour))
    minutes = int(round((hour - hours) * 60))
    if minutes == 60:
        hours += 1
        minutes = 0
    return f"{hours % HOURS_PER_DAY:02d}:{minutes:02d}"
