"""Pointer gesture state machine for drawing and editing ranges on the dial."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from .hit_testing import find_nearest_endpoint
from .models import Endpoint, TimeRange
from .quantizer import angle_to_hour
from .store import IntervalStore
from .validation import DRAG_CREATE_POLICY, DRAG_EDIT_POLICY, check_duration


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Creating:
    start_angle: float
    current_angle: float


@dataclass(frozen=True, slots=True)
class EditingEndpoint:
    range_index: int
    which: Endpoint
    current_angle: float
    original_hour: float


GestureState = Union[Idle, Creating, EditingEndpoint]

IDLE = Idle()


class GestureOutcome(Enum):
    IGNORED = "ignored"
    CREATING = "creating"
    EDITING = "editing"
    PREVIEW = "preview"
    UPDATED = "updated"
    COMMITTED = "committed"
    DISCARDED = "discarded"
    DELETED = "deleted"
    CANCELLED = "cancelled"


class GestureStateMachine:
    """Tracks a single in-progress pointer interaction.

    Every pointer-up and pointer-leave returns the machine to ``Idle``, including
    when the store raises part-way through the transition.
    """

    def __init__(
        self,
        store: IntervalStore,
        tolerance_hours: float,
        restore_on_cancel: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._tolerance_hours = tolerance_hours
        self._restore_on_cancel = restore_on_cancel
        self._state: GestureState = IDLE
        self._logger = logger or logging.getLogger("timedial.gestures")

    # ------------------------------------------------------------------
    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return isinstance(self._state, Idle)

    @property
    def tolerance_hours(self) -> float:
        return self._tolerance_hours

    @tolerance_hours.setter
    def tolerance_hours(self, value: float) -> None:
        if value <= 0:
            raise ValueError("Hit tolerance must be positive")
        self._tolerance_hours = value

    @property
    def restore_on_cancel(self) -> bool:
        return self._restore_on_cancel

    @restore_on_cancel.setter
    def restore_on_cancel(self, value: bool) -> None:
        self._restore_on_cancel = bool(value)

    # ------------------------------------------------------------------
    def pointer_down(self, angle: float) -> GestureOutcome:
        if not self.is_idle:
            self.cancel()

        hit = find_nearest_endpoint(angle, self._store.snapshot(), self._tolerance_hours)
        if hit is None:
            self._state = Creating(start_angle=angle, current_angle=angle)
            self._logger.debug("Gesture started: create", extra={"event": "gesture_create_start", "angle": angle})
            return GestureOutcome.CREATING

        original = self._store[hit.index].endpoint(hit.which)
        self._state = EditingEndpoint(
            range_index=hit.index,
            which=hit.which,
            current_angle=angle,
            original_hour=original,
        )
        self._logger.debug(
            "Gesture started: edit endpoint",
            extra={"event": "gesture_edit_start", "index": hit.index, "which": hit.which.value},
        )
        return GestureOutcome.EDITING

    def pointer_move(self, angle: float) -> GestureOutcome:
        state = self._state
        if isinstance(state, Creating):
            self._state = replace(state, current_angle=angle)
            return GestureOutcome.PREVIEW
        if isinstance(state, EditingEndpoint):
            self._state = replace(state, current_angle=angle)
            self._store.update_endpoint(state.range_index, state.which, angle_to_hour(angle))
            return GestureOutcome.UPDATED
        return GestureOutcome.IGNORED

    def pointer_up(self) -> GestureOutcome:
        state = self._state
        try:
            if isinstance(state, Creating):
                return self._finish_create(state)
            if isinstance(state, EditingEndpoint):
                return self._finish_edit(state)
            return GestureOutcome.IGNORED
        finally:
            self._state = IDLE

    def pointer_leave(self) -> GestureOutcome:
        return self.cancel()

    def cancel(self) -> GestureOutcome:
        state = self._state
        try:
            if isinstance(state, Idle):
                return GestureOutcome.IGNORED
            if isinstance(state, EditingEndpoint) and self._restore_on_cancel:
                self._store.update_endpoint(state.range_index, state.which, state.original_hour)
            self._logger.debug("Gesture cancelled", extra={"event": "gesture_cancel"})
            return GestureOutcome.CANCELLED
        finally:
            self._state = IDLE

    def reset(self) -> None:
        """Drop the current gesture without touching the store."""
        self._state = IDLE

    def preview_range(self) -> TimeRange | None:
        state = self._state
        if not isinstance(state, Creating):
            return None
        return TimeRange(start=angle_to_hour(state.start_angle), end=angle_to_hour(state.current_angle))

    # ------------------------------------------------------------------
    def _finish_create(self, state: Creating) -> GestureOutcome:
        candidate = TimeRange(start=angle_to_hour(state.start_angle), end=angle_to_hour(state.current_angle))
        if check_duration(candidate, DRAG_CREATE_POLICY) is not None:
            self._logger.debug(
                "Discarding drawn range",
                extra={"event": "gesture_create_discard", "start": candidate.start, "end": candidate.end},
            )
            return GestureOutcome.DISCARDED
        self._store.add(candidate.start, candidate.end)
        return GestureOutcome.COMMITTED

    def _finish_edit(self, state: EditingEndpoint) -> GestureOutcome:
        edited = self._store[state.range_index]
        if check_duration(edited, DRAG_EDIT_POLICY) is not None:
            self._logger.info(
                "Edited range too short or too long; removing it",
                extra={"event": "gesture_edit_delete", "index": state.range_index},
            )
            self._store.remove_at(state.range_index)
            return GestureOutcome.DELETED
        return GestureOutcome.COMMITTED
