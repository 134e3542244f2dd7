"""Domain-specific exception types."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import TimeRange
    from .validation import DurationPolicy


class TimeDialError(Exception):
    """Base application error."""


class SettingsError(TimeDialError):
    """Raised when settings cannot be validated or saved."""


class ExportError(TimeDialError):
    """Raised when a snapshot of the ranges cannot be exported."""


class RangeIndexError(TimeDialError, IndexError):
    """Raised when a caller addresses a range with a stale or invalid index."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Range index {index} out of range for {size} range(s)")
        self.index = index
        self.size = size


class InvalidDurationError(TimeDialError):
    """Raised when a candidate range falls outside the bounds of its entry path."""

    def __init__(self, message: str, time_range: "TimeRange", policy: "DurationPolicy") -> None:
        super().__init__(message)
        self.time_range = time_range
        self.policy = policy
