"""Tests for the duration policies used by each entry path."""

import pytest

from timedial.core.exceptions import InvalidDurationError
from timedial.core.models import TimeRange
from timedial.core.validation import (
    DRAG_CREATE_POLICY,
    DRAG_EDIT_POLICY,
    NUMERIC_EDIT_POLICY,
    InvalidOutcome,
    check_duration,
    require_valid_duration,
    validate_duration,
)


def test_bounds_are_strict():
    assert validate_duration(TimeRange(9.0, 9.5), 0.5, 23.5) is False
    assert validate_duration(TimeRange(9.0, 9.75), 0.5, 23.5) is True
    assert validate_duration(TimeRange(9.0, 8.5), 0.5, 23.5) is False


def test_drag_policies_share_bounds_but_not_outcomes():
    assert (DRAG_CREATE_POLICY.min_hours, DRAG_CREATE_POLICY.max_hours) == (0.5, 23.5)
    assert (DRAG_EDIT_POLICY.min_hours, DRAG_EDIT_POLICY.max_hours) == (0.5, 23.5)
    assert DRAG_CREATE_POLICY.on_invalid is InvalidOutcome.DISCARD
    assert DRAG_EDIT_POLICY.on_invalid is InvalidOutcome.DELETE_EXISTING


def test_numeric_policy_is_more_permissive():
    twenty_minutes = TimeRange(9.0, 9.0 + 20 / 60)
    assert check_duration(twenty_minutes, DRAG_CREATE_POLICY) is InvalidOutcome.DISCARD
    assert check_duration(twenty_minutes, NUMERIC_EDIT_POLICY) is None


def test_valid_range_has_no_outcome():
    assert check_duration(TimeRange(9.0, 17.0), DRAG_EDIT_POLICY) is None


def test_require_valid_duration_message():
    candidate = TimeRange(10.0, 10.0 + 10 / 60)
    with pytest.raises(InvalidDurationError) as excinfo:
        require_valid_duration(candidate, NUMERIC_EDIT_POLICY)
    assert str(excinfo.value) == (
        "Time range 10:00 - 10:10 must last more than 15 minutes and less than 23.75 hours."
    )
    assert excinfo.value.time_range == candidate
    assert excinfo.value.policy is NUMERIC_EDIT_POLICY
