"""Domain models for TimeDial."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from .quantizer import HOURS_PER_DAY, format_hour, wrap_duration


class Endpoint(str, Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True, slots=True)
class TimeRange:
    """A clockwise span of the day, possibly wrapping through midnight."""

    start: float
    end: float

    def __post_init__(self) -> None:
        for name in ("start", "end"):
            value = getattr(self, name)
            if not (0 <= value < HOURS_PER_DAY):
                raise ValueError(f"TimeRange {name} must be within [0, 24), got {value}")

    @property
    def duration(self) -> float:
        return wrap_duration(self.start, self.end)

    @property
    def wraps_midnight(self) -> bool:
        return self.end <= self.start

    @property
    def label(self) -> str:
        return f"{format_hour(self.start)} - {format_hour(self.end)}"

    def endpoint(self, which: Endpoint) -> float:
        return self.start if which is Endpoint.START else self.end

    def with_endpoint(self, which: Endpoint, hour: float) -> "TimeRange":
        if which is Endpoint.START:
            return replace(self, start=hour)
        return replace(self, end=hour)

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "start": format_hour(self.start),
            "end": format_hour(self.end),
            "start_hour": self.start,
            "end_hour": self.end,
        }


@dataclass(frozen=True, slots=True)
class EndpointHit:
    """Identifies one boundary of one stored range."""

    index: int
    which: Endpoint
