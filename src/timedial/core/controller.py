"""Owns the interval store and gesture machine and exposes them to the UI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QObject, Signal

from .exceptions import InvalidDurationError, RangeIndexError
from .gestures import GestureOutcome, GestureState, GestureStateMachine
from .models import TimeRange
from .settings import Settings
from .store import IntervalStore
from .validation import NUMERIC_EDIT_POLICY, require_valid_duration

NO_EDITING_INDEX = -1


@dataclass(frozen=True, slots=True)
class RenderState:
    """Everything the painter needs to draw one frame of the dial."""

    ranges: tuple[TimeRange, ...]
    gesture: GestureState
    preview: TimeRange | None
    editing_index: int = NO_EDITING_INDEX


class DialController(QObject):
    """Mediates pointer input, list edits and exports for a single dial."""

    ranges_changed: Signal = Signal()
    redraw_requested: Signal = Signal()
    message_raised: Signal = Signal(str)
    editing_index_changed: Signal = Signal(int)

    def __init__(
        self,
        settings: Settings | None = None,
        store: IntervalStore | None = None,
        logger: Optional[logging.Logger] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or Settings()
        self._store = store or IntervalStore()
        self._logger = logger or logging.getLogger("timedial.controller")
        self._surface_width: int | None = None
        self._editing_index = NO_EDITING_INDEX
        self._machine = GestureStateMachine(
            self._store,
            tolerance_hours=self._settings.hit_tolerance_hours,
            restore_on_cancel=self._settings.restore_edit_on_cancel,
        )

    # ------------------------------------------------------------------
    @property
    def store(self) -> IntervalStore:
        return self._store

    @property
    def gesture_state(self) -> GestureState:
        return self._machine.state

    @property
    def hit_tolerance_hours(self) -> float:
        return self._machine.tolerance_hours

    @property
    def editing_index(self) -> int:
        return self._editing_index

    def snapshot(self) -> tuple[TimeRange, ...]:
        return self._store.snapshot()

    def render_state(self) -> RenderState:
        return RenderState(
            ranges=self._store.snapshot(),
            gesture=self._machine.state,
            preview=self._machine.preview_range(),
            editing_index=self._editing_index,
        )

    def apply_settings(self, settings: Settings) -> None:
        self._settings = settings
        self._machine.restore_on_cancel = settings.restore_edit_on_cancel
        self._refresh_tolerance()

    def set_surface_width(self, width: int) -> None:
        self._surface_width = width
        self._refresh_tolerance()

    # ------------------------------------------------------------------
    # Pointer input
    def pointer_pressed(self, angle: float) -> GestureOutcome:
        return self._dispatch(self._machine.pointer_down, angle)

    def pointer_moved(self, angle: float) -> GestureOutcome:
        return self._dispatch(self._machine.pointer_move, angle)

    def pointer_released(self) -> GestureOutcome:
        return self._dispatch(self._machine.pointer_up)

    def pointer_left(self) -> GestureOutcome:
        return self._dispatch(self._machine.pointer_leave)

    # ------------------------------------------------------------------
    # List surface
    def add_range(self, start: float, end: float) -> TimeRange:
        self._machine.reset()
        added = self._store.add(start, end)
        self._notify_ranges_changed()
        return added

    def remove_range(self, index: int) -> TimeRange:
        self._machine.reset()
        removed = self._store.remove_at(index)
        if self._editing_index == index:
            self._set_editing_index(NO_EDITING_INDEX)
        elif self._editing_index > index:
            self._set_editing_index(self._editing_index - 1)
        self._notify_ranges_changed()
        return removed

    def clear_ranges(self) -> None:
        self._machine.reset()
        self._store.clear()
        self._set_editing_index(NO_EDITING_INDEX)
        self._notify_ranges_changed()

    def start_editing_range(self, index: int) -> None:
        if not (0 <= index < len(self._store)):
            raise RangeIndexError(index, len(self._store))
        self._set_editing_index(index)

    def cancel_editing_range(self) -> None:
        self._set_editing_index(NO_EDITING_INDEX)

    def save_edited_range(self, index: int, start: float, end: float) -> bool:
        """Replace both endpoints of ``index`` or surface a message and change nothing."""
        candidate = TimeRange(start=start, end=end)
        try:
            require_valid_duration(candidate, NUMERIC_EDIT_POLICY)
        except InvalidDurationError as exc:
            self._logger.warning(
                "Rejected edited range",
                extra={"event": "range_edit_rejected", "index": index, "start": start, "end": end},
            )
            self.message_raised.emit(str(exc))
            return False

        self._machine.reset()
        self._store.replace_at(index, start, end)
        self._set_editing_index(NO_EDITING_INDEX)
        self._notify_ranges_changed()
        return True

    # ------------------------------------------------------------------
    def _dispatch(self, handler, *args) -> GestureOutcome:
        before = self._store.snapshot()
        outcome = handler(*args)
        if outcome is not GestureOutcome.IGNORED:
            self.redraw_requested.emit()
        if outcome is GestureOutcome.DELETED:
            self._logger.info(
                "Range deleted by invalid drag edit",
                extra={"event": "range_drag_edit_deleted", "count_before": len(before)},
            )
            self._set_editing_index(NO_EDITING_INDEX)
        if self._store.snapshot() != before:
            self.ranges_changed.emit()
        return outcome

    def _refresh_tolerance(self) -> None:
        if self._surface_width is None:
            tolerance = self._settings.hit_tolerance_hours
        else:
            tolerance = self._settings.tolerance_for_width(self._surface_width)
        if tolerance != self._machine.tolerance_hours:
            self._logger.debug(
                "Hit tolerance changed",
                extra={"event": "hit_tolerance_update", "tolerance": tolerance, "width": self._surface_width},
            )
        self._machine.tolerance_hours = tolerance

    def _set_editing_index(self, index: int) -> None:
        if index == self._editing_index:
            return
        self._editing_index = index
        self.editing_index_changed.emit(index)

    def _notify_ranges_changed(self) -> None:
        self.ranges_changed.emit()
        self.redraw_requested.emit()
