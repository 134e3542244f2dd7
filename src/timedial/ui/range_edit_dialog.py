"""Dialog for typing new start and end times for an existing range."""

from __future__ import annotations

import logging

from PySide6.QtCore import QTime, Qt
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QTimeEdit,
    QVBoxLayout,
)

from ..core.controller import DialController
from ..core.quantizer import wrap_duration

LOGGER = logging.getLogger("timedial.ui.range_edit")


def _to_qtime(hour: float) -> QTime:
    total_minutes = int(round(hour * 60)) % (24 * 60)
    return QTime(total_minutes // 60, total_minutes % 60)


def _to_hour(value: QTime) -> float:
    return value.hour() + value.minute() / 60


class RangeEditDialog(QDialog):
    """Edit one range numerically; invalid durations keep the dialog open."""

    def __init__(self, controller: DialController, index: int, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Edit Time Range")
        self.setModal(True)
        self._controller = controller
        self._index = index
        self._original = controller.store[index]

        self._build_ui()
        self._start_edit.setTime(_to_qtime(self._original.start))
        self._end_edit.setTime(_to_qtime(self._original.end))
        self._update_duration()

        self._controller.message_raised.connect(self._show_message)
        self._controller.start_editing_range(index)
        self.finished.connect(self._on_finished)

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)

        description = QLabel(
            f"Editing range {self._index + 1} ({self._original.label}). End times before the start wrap past midnight.",
            self,
        )
        description.setWordWrap(True)
        layout.addWidget(description)

        form = QFormLayout()
        form.setSpacing(10)

        self._start_edit = QTimeEdit(self)
        self._start_edit.setDisplayFormat("HH:mm")
        self._start_edit.timeChanged.connect(self._update_duration)
        form.addRow("Start", self._start_edit)

        self._end_edit = QTimeEdit(self)
        self._end_edit.setDisplayFormat("HH:mm")
        self._end_edit.timeChanged.connect(self._update_duration)
        form.addRow("End", self._end_edit)

        self._duration_label = QLabel("", self)
        form.addRow("Duration", self._duration_label)
        layout.addLayout(form)

        self._status_label = QLabel("", self)
        self._status_label.setWordWrap(True)
        self._status_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        palette = self._status_label.palette()
        palette.setColor(self._status_label.foregroundRole(), Qt.red)
        self._status_label.setPalette(palette)
        layout.addWidget(self._status_label)

        self._button_box = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel, self)
        self._button_box.accepted.connect(self._on_accept)
        self._button_box.rejected.connect(self.reject)
        layout.addWidget(self._button_box)

        self.resize(380, 0)

    def _update_duration(self) -> None:
        start = _to_hour(self._start_edit.time())
        end = _to_hour(self._end_edit.time())
        minutes = int(round(wrap_duration(start, end) * 60))
        hours, rest = divmod(minutes, 60)
        self._duration_label.setText(f"{hours}h {rest:02d}m")
        self._status_label.clear()

    def _show_message(self, message: str) -> None:
        self._status_label.setText(message)

    def _on_accept(self) -> None:
        start = _to_hour(self._start_edit.time())
        end = _to_hour(self._end_edit.time())
        if self._controller.save_edited_range(self._index, start, end):
            self.accept()

    def _on_finished(self, _result: int) -> None:
        self._controller.message_raised.disconnect(self._show_message)
        self._controller.cancel_editing_range()
