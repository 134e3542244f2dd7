"""Tests for the DialController facade used by the widgets."""

import pytest

from timedial.core.controller import NO_EDITING_INDEX, DialController
from timedial.core.exceptions import RangeIndexError
from timedial.core.gestures import GestureOutcome, Idle
from timedial.core.models import TimeRange
from timedial.core.quantizer import hour_to_angle
from timedial.core.settings import Settings


@pytest.fixture
def controller(qt_core_app, app_data_dir):
    return DialController(Settings())


@pytest.fixture
def signals(controller):
    recorded = {"ranges": 0, "redraw": 0, "messages": [], "editing": []}

    def on_ranges():
        recorded["ranges"] += 1

    def on_redraw():
        recorded["redraw"] += 1

    controller.ranges_changed.connect(on_ranges)
    controller.redraw_requested.connect(on_redraw)
    controller.message_raised.connect(recorded["messages"].append)
    controller.editing_index_changed.connect(recorded["editing"].append)
    return recorded


def test_drag_creates_range_and_notifies(controller, signals):
    controller.pointer_pressed(hour_to_angle(9.0))
    controller.pointer_moved(hour_to_angle(17.0))
    assert signals["ranges"] == 0
    assert controller.render_state().preview == TimeRange(9.0, 17.0)

    assert controller.pointer_released() is GestureOutcome.COMMITTED
    assert controller.snapshot() == (TimeRange(9.0, 17.0),)
    assert signals["ranges"] == 1
    assert signals["redraw"] >= 3
    assert isinstance(controller.gesture_state, Idle)


def test_discarded_drag_does_not_emit_ranges_changed(controller, signals):
    controller.pointer_pressed(hour_to_angle(9.0))
    controller.pointer_moved(hour_to_angle(9.25))
    assert controller.pointer_released() is GestureOutcome.DISCARDED
    assert controller.snapshot() == ()
    assert signals["ranges"] == 0


def test_pointer_left_always_idles(controller):
    controller.add_range(9.0, 17.0)
    controller.pointer_pressed(hour_to_angle(17.0))
    controller.pointer_moved(hour_to_angle(20.0))
    controller.pointer_left()
    assert isinstance(controller.gesture_state, Idle)
    assert controller.snapshot() == (TimeRange(9.0, 17.0),)


def test_restore_setting_is_applied(controller):
    controller.apply_settings(Settings(restore_edit_on_cancel=False))
    controller.add_range(9.0, 17.0)
    controller.pointer_pressed(hour_to_angle(17.0))
    controller.pointer_moved(hour_to_angle(20.0))
    controller.pointer_left()
    assert controller.snapshot() == (TimeRange(9.0, 20.0),)


def test_save_edited_range_rejects_short_range(controller, signals):
    controller.add_range(9.0, 17.0)
    before = controller.snapshot()
    assert controller.save_edited_range(0, 10.0, 10.0 + 10 / 60) is False
    assert controller.snapshot() == before
    assert signals["messages"] == [
        "Time range 10:00 - 10:10 must last more than 15 minutes and less than 23.75 hours."
    ]


def test_save_edited_range_replaces_both_endpoints(controller, signals):
    controller.add_range(9.0, 17.0)
    controller.start_editing_range(0)
    assert controller.editing_index == 0
    # Numeric edits keep minute precision.
    assert controller.save_edited_range(0, 8.0 + 20 / 60, 12.0) is True
    assert controller.snapshot() == (TimeRange(8.0 + 20 / 60, 12.0),)
    assert controller.editing_index == NO_EDITING_INDEX
    assert signals["editing"] == [0, NO_EDITING_INDEX]


def test_start_editing_rejects_stale_index(controller):
    with pytest.raises(RangeIndexError):
        controller.start_editing_range(0)


def test_remove_range_shifts_editing_index(controller):
    controller.add_range(1.0, 2.0)
    controller.add_range(3.0, 4.0)
    controller.start_editing_range(1)
    controller.remove_range(0)
    assert controller.editing_index == 0
    controller.remove_range(0)
    assert controller.editing_index == NO_EDITING_INDEX


def test_clear_ranges(controller, signals):
    controller.add_range(9.0, 17.0)
    controller.add_range(22.0, 2.0)
    controller.clear_ranges()
    assert controller.snapshot() == ()
    assert signals["ranges"] == 3


def test_drag_edit_delete_clears_editing_index(controller):
    controller.add_range(9.0, 17.0)
    controller.start_editing_range(0)
    controller.pointer_pressed(hour_to_angle(17.0))
    controller.pointer_moved(hour_to_angle(9.25))
    assert controller.pointer_released() is GestureOutcome.DELETED
    assert controller.snapshot() == ()
    assert controller.editing_index == NO_EDITING_INDEX


def test_surface_width_switches_tolerance(controller):
    assert controller.hit_tolerance_hours == 0.5
    controller.set_surface_width(400)
    assert controller.hit_tolerance_hours == 1.0
    controller.set_surface_width(900)
    assert controller.hit_tolerance_hours == 0.5


@pytest.mark.parametrize("start,end", [(10.0, 9.75), (10.0, 10.0), (0.0, 23.9)])
def test_save_edited_range_rejects_nearly_full_day(controller, signals, start, end):
    controller.add_range(9.0, 17.0)
    assert controller.save_edited_range(0, start, end) is False
    assert controller.snapshot() == (TimeRange(9.0, 17.0),)
    assert len(signals["messages"]) == 1
    assert "less than 23.75 hours" in signals["messages"][0]


def test_save_edited_range_accepts_just_under_upper_bound(controller, signals):
    controller.add_range(9.0, 17.0)
    assert controller.save_edited_range(0, 10.0, 9.5) is True
    assert controller.snapshot()[0].duration == 23.5
    assert signals["messages"] == []
