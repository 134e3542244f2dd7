"""Duration policies for the three ways a range can be entered.

Drag creation, drag editing and numeric editing apply structurally the same
check with different bounds and different consequences. The bounds stay as
separate named constants; they are not interchangeable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import InvalidDurationError
from .models import TimeRange


class InvalidOutcome(Enum):
    DISCARD = "discard"
    DELETE_EXISTING = "delete_existing"
    REJECT_WITH_MESSAGE = "reject_with_message"


@dataclass(frozen=True, slots=True)
class DurationPolicy:
    name: str
    min_hours: float
    max_hours: float
    on_invalid: InvalidOutcome


DRAG_CREATE_POLICY = DurationPolicy("drag_create", 0.5, 23.5, InvalidOutcome.DISCARD)
DRAG_EDIT_POLICY = DurationPolicy("drag_edit", 0.5, 23.5, InvalidOutcome.DELETE_EXISTING)
NUMERIC_EDIT_POLICY = DurationPolicy("numeric_edit", 0.25, 23.75, InvalidOutcome.REJECT_WITH_MESSAGE)


def validate_duration(time_range: TimeRange, min_hours: float, max_hours: float) -> bool:
    """Return True when the wrap-aware duration lies strictly inside the bounds."""
    return min_hours < time_range.duration < max_hours


def check_duration(time_range: TimeRange, policy: DurationPolicy) -> InvalidOutcome | None:
    """Return ``None`` for an acceptable range, otherwise the policy's outcome."""
    if validate_duration(time_range, policy.min_hours, policy.max_hours):
        return None
    return policy.on_invalid


def require_valid_duration(time_range: TimeRange, policy: DurationPolicy) -> None:
    if check_duration(time_range, policy) is None:
        return
    message = (
        f"Time range {time_range.label} must last more than {_describe(policy.min_hours)} "
        f"and less than {_describe(policy.max_hours)}."
    )
    raise InvalidDurationError(message, time_range, policy)


def _describe(hours: float) -> str:
    if hours < 1:
        return f"{int(round(hours * 60))} minutes"
    return f"{hours:g} hours"
