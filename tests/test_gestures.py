"""Tests for the pointer gesture state machine."""

import pytest

from timedial.core.gestures import (
    Creating,
    EditingEndpoint,
    GestureOutcome,
    GestureStateMachine,
    Idle,
)
from timedial.core.models import Endpoint, TimeRange
from timedial.core.quantizer import hour_to_angle


@pytest.fixture
def machine(store):
    return GestureStateMachine(store, tolerance_hours=0.5)


def drag(machine, *hours):
    machine.pointer_down(hour_to_angle(hours[0]))
    for hour in hours[1:]:
        machine.pointer_move(hour_to_angle(hour))


class TestCreate:
    def test_drag_commits_range(self, machine, store):
        drag(machine, 9.0, 12.0, 17.0)
        assert machine.pointer_up() is GestureOutcome.COMMITTED
        assert store.snapshot() == (TimeRange(9.0, 17.0),)
        assert isinstance(machine.state, Idle)

    def test_short_drag_is_discarded(self, machine, store):
        drag(machine, 9.0, 9.25)
        assert machine.pointer_up() is GestureOutcome.DISCARDED
        assert store.snapshot() == ()

    def test_click_without_move_is_discarded(self, machine, store):
        drag(machine, 9.0)
        assert machine.pointer_up() is GestureOutcome.DISCARDED
        assert len(store) == 0

    def test_overnight_drag_uses_wrapped_duration(self, machine, store):
        drag(machine, 22.0, 2.0)
        assert machine.pointer_up() is GestureOutcome.COMMITTED
        (created,) = store.snapshot()
        assert created == TimeRange(22.0, 2.0)
        assert created.duration == 4.0

    def test_nearly_full_day_drag_is_discarded(self, machine, store):
        # 09:00 clockwise to 08:45 spans 23.75h.
        drag(machine, 9.0, 18.0, 8.75)
        assert machine.pointer_up() is GestureOutcome.DISCARDED
        assert store.snapshot() == ()

    def test_longest_allowed_drag_commits(self, machine, store):
        drag(machine, 9.0, 18.0, 8.25)
        assert machine.pointer_up() is GestureOutcome.COMMITTED
        assert store[0].duration == 23.25

    def test_preview_follows_pointer(self, machine, store):
        drag(machine, 9.0)
        assert isinstance(machine.state, Creating)
        assert machine.pointer_move(hour_to_angle(11.0)) is GestureOutcome.PREVIEW
        assert machine.preview_range() == TimeRange(9.0, 11.0)
        assert store.snapshot() == ()


class TestEdit:
    def test_press_near_endpoint_starts_edit(self, machine, store):
        store.add(9.0, 17.0)
        assert machine.pointer_down(hour_to_angle(17.0)) is GestureOutcome.EDITING
        state = machine.state
        assert isinstance(state, EditingEndpoint)
        assert (state.range_index, state.which, state.original_hour) == (0, Endpoint.END, 17.0)

    def test_edit_updates_store_live_and_commits(self, machine, store):
        store.add(9.0, 17.0)
        drag(machine, 17.0, 18.0)
        assert store[0] == TimeRange(9.0, 18.0)
        assert machine.pointer_up() is GestureOutcome.COMMITTED
        assert store.snapshot() == (TimeRange(9.0, 18.0),)

    def test_edit_too_short_deletes_range(self, machine, store):
        store.add(9.0, 17.0)
        store.add(20.0, 21.0)
        drag(machine, 17.0, 9.25)
        assert machine.pointer_up() is GestureOutcome.DELETED
        assert store.snapshot() == (TimeRange(20.0, 21.0),)
        assert machine.is_idle


    def test_dragging_end_onto_start_deletes_range(self, machine, store):
        store.add(9.0, 17.0)
        drag(machine, 17.0, 3.0, 9.0)
        assert store[0].duration == 24.0
        assert machine.pointer_up() is GestureOutcome.DELETED
        assert store.snapshot() == ()

    def test_edit_past_upper_bound_deletes_range(self, machine, store):
        store.add(9.0, 17.0)
        drag(machine, 17.0, 3.0, 8.75)
        assert machine.pointer_up() is GestureOutcome.DELETED
        assert len(store) == 0


class TestCancel:
    def test_leave_restores_edited_endpoint(self, machine, store):
        store.add(9.0, 17.0)
        drag(machine, 17.0, 19.0)
        assert machine.pointer_leave() is GestureOutcome.CANCELLED
        assert store.snapshot() == (TimeRange(9.0, 17.0),)
        assert machine.is_idle

    def test_leave_keeps_edit_when_restore_disabled(self, store):
        machine = GestureStateMachine(store, tolerance_hours=0.5, restore_on_cancel=False)
        store.add(9.0, 17.0)
        drag(machine, 17.0, 19.0)
        machine.pointer_leave()
        assert store.snapshot() == (TimeRange(9.0, 19.0),)

    def test_leave_abandons_create(self, machine, store):
        drag(machine, 9.0, 17.0)
        assert machine.pointer_leave() is GestureOutcome.CANCELLED
        assert store.snapshot() == ()
        assert machine.is_idle

    def test_leave_when_idle_is_ignored(self, machine):
        assert machine.pointer_leave() is GestureOutcome.IGNORED
        assert machine.is_idle

    def test_press_during_gesture_cancels_it_first(self, machine, store):
        store.add(9.0, 17.0)
        drag(machine, 17.0, 19.0)
        assert machine.pointer_down(hour_to_angle(3.0)) is GestureOutcome.CREATING
        assert store.snapshot() == (TimeRange(9.0, 17.0),)


class TestIdleInvariant:
    def test_move_and_up_when_idle_are_ignored(self, machine, store):
        assert machine.pointer_move(hour_to_angle(4.0)) is GestureOutcome.IGNORED
        assert machine.pointer_up() is GestureOutcome.IGNORED
        assert store.snapshot() == ()

    def test_returns_to_idle_when_store_raises(self, machine, store):
        store.add(9.0, 17.0)
        drag(machine, 17.0, 9.25)
        # The range vanished underneath the gesture; the machine still resets.
        store.clear()
        with pytest.raises(IndexError):
            machine.pointer_up()
        assert machine.is_idle

    def test_reset_leaves_store_untouched(self, machine, store):
        store.add(9.0, 17.0)
        drag(machine, 17.0, 19.0)
        machine.reset()
        assert machine.is_idle
        assert store[0] == TimeRange(9.0, 19.0)

    def test_tolerance_must_be_positive(self, machine):
        with pytest.raises(ValueError):
            machine.tolerance_hours = 0
