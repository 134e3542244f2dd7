"""In-memory, insertion-ordered collection of time ranges."""

from __future__ import annotations

import logging
from typing import Iterator

from .exceptions import RangeIndexError
from .models import Endpoint, TimeRange
from .validation import validate_duration

__all__ = ["IntervalStore", "validate_duration"]


class IntervalStore:
    """Holds the ranges drawn on the dial.

    Indices are positional and only valid until the next mutation; callers must
    re-derive them from the current snapshot instead of caching them.
    """

    def __init__(self, ranges: list[TimeRange] | None = None, logger: logging.Logger | None = None) -> None:
        self._ranges: list[TimeRange] = list(ranges or [])
        self._logger = logger or logging.getLogger("timedial.store")

    # ------------------------------------------------------------------
    # Public API
    def add(self, start: float, end: float) -> TimeRange:
        time_range = TimeRange(start=start, end=end)
        self._ranges.append(time_range)
        self._logger.info(
            "Range added",
            extra={"event": "range_add", "index": len(self._ranges) - 1, "start": start, "end": end},
        )
        return time_range

    def remove_at(self, index: int) -> TimeRange:
        self._check_index(index)
        removed = self._ranges.pop(index)
        self._logger.info(
            "Range removed",
            extra={"event": "range_remove", "index": index, "start": removed.start, "end": removed.end},
        )
        return removed

    def clear(self) -> None:
        count = len(self._ranges)
        self._ranges.clear()
        self._logger.info("Ranges cleared", extra={"event": "range_clear", "count": count})

    def update_endpoint(self, index: int, which: Endpoint, hour: float) -> TimeRange:
        """Replace one boundary in place. The resulting duration is not validated."""
        self._check_index(index)
        updated = self._ranges[index].with_endpoint(which, hour)
        self._ranges[index] = updated
        self._logger.debug(
            "Range endpoint updated",
            extra={"event": "range_update_endpoint", "index": index, "which": which.value, "hour": hour},
        )
        return updated

    def replace_at(self, index: int, start: float, end: float) -> TimeRange:
        self._check_index(index)
        updated = TimeRange(start=start, end=end)
        self._ranges[index] = updated
        self._logger.info(
            "Range replaced",
            extra={"event": "range_replace", "index": index, "start": start, "end": end},
        )
        return updated

    def snapshot(self) -> tuple[TimeRange, ...]:
        return tuple(self._ranges)

    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self) -> Iterator[TimeRange]:
        return iter(tuple(self._ranges))

    def __getitem__(self, index: int) -> TimeRange:
        self._check_index(index)
        return self._ranges[index]

    # ------------------------------------------------------------------
    # Internal helpers
    def _check_index(self, index: int) -> None:
        # Negative indices are rejected; Python-style wraparound would hide stale indices.
        if not (0 <= index < len(self._ranges)):
            self._logger.error(
                "Stale range index",
                extra={"event": "range_index_invalid", "index": index, "size": len(self._ranges)},
            )
            raise RangeIndexError(index, len(self._ranges))
