"""Table model listing the ranges drawn on the dial."""

from __future__ import annotations

from typing import List

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PySide6.QtGui import QBrush, QColor

from ..core.controller import NO_EDITING_INDEX
from ..core.models import TimeRange
from ..core.quantizer import format_hour
from .icons import edit_icon, trash_icon


class RangesTableModel(QAbstractTableModel):
    HEADERS = ("Start", "End", "Duration", "Edit", "Remove")
    EDIT_COLUMN = 3
    REMOVE_COLUMN = 4

    def __init__(self) -> None:
        super().__init__()
        self._ranges: List[TimeRange] = []
        self._editing_index = NO_EDITING_INDEX

    # ------------------------------------------------------------------
    def rowCount(self, parent: QModelIndex | None = None) -> int:  # type: ignore[override]
        if parent and parent.isValid():
            return 0
        return len(self._ranges)

    def columnCount(self, parent: QModelIndex | None = None) -> int:  # type: ignore[override]
        return len(self.HEADERS)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):  # type: ignore[override]
        if not index.isValid() or not (0 <= index.row() < len(self._ranges)):
            return None
        time_range = self._ranges[index.row()]
        column = index.column()

        if role == Qt.DisplayRole:
            if column == 0:
                return format_hour(time_range.start)
            if column == 1:
                return format_hour(time_range.end)
            if column == 2:
                return self._format_duration(time_range.duration)
            if column == self.EDIT_COLUMN:
                return "Edit"
            if column == self.REMOVE_COLUMN:
                return "Remove"
        if role == Qt.DecorationRole:
            if column == self.EDIT_COLUMN:
                return edit_icon()
            if column == self.REMOVE_COLUMN:
                return trash_icon()
        if role == Qt.ToolTipRole and time_range.wraps_midnight:
            return "Wraps past midnight"
        if role == Qt.BackgroundRole and index.row() == self._editing_index:
            return QBrush(QColor(239, 68, 68, 60))
        if role == Qt.TextAlignmentRole and column >= 2:
            return int(Qt.AlignCenter | Qt.AlignVCenter)
        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole):  # type: ignore[override]
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal and 0 <= section < len(self.HEADERS):
            return self.HEADERS[section]
        return None

    def flags(self, index: QModelIndex):  # type: ignore[override]
        return Qt.ItemIsSelectable | Qt.ItemIsEnabled

    # ------------------------------------------------------------------
    def update_ranges(self, ranges: tuple[TimeRange, ...]) -> None:
        self.beginResetModel()
        self._ranges = list(ranges)
        if self._editing_index >= len(self._ranges):
            self._editing_index = NO_EDITING_INDEX
        self.endResetModel()

    def set_editing_index(self, index: int) -> None:
        previous = self._editing_index
        self._editing_index = index
        for row in (previous, index):
            if 0 <= row < len(self._ranges):
                self.dataChanged.emit(self.index(row, 0), self.index(row, len(self.HEADERS) - 1))

    def range_for_row(self, row: int) -> TimeRange | None:
        if 0 <= row < len(self._ranges):
            return self._ranges[row]
        return None

    @staticmethod
    def _format_duration(hours: float) -> str:
        whole, minutes = divmod(int(round(hours * 60)), 60)
        chunks = []
        if whole:
            chunks.append(f"{whole}h")
        if minutes or not chunks:
            chunks.append(f"{minutes}m")
        return " ".join(chunks)
