"""Tests for the table model backing the ranges list."""

from PySide6.QtCore import Qt

from timedial.core.controller import NO_EDITING_INDEX
from timedial.core.models import TimeRange
from timedial.ui.ranges_model import RangesTableModel


def test_rows_render_clock_times(qt_core_app):
    model = RangesTableModel()
    model.update_ranges((TimeRange(9.0, 17.5), TimeRange(22.0, 2.0)))
    assert model.rowCount() == 2
    assert model.columnCount() == len(RangesTableModel.HEADERS)
    assert model.data(model.index(0, 0)) == "09:00"
    assert model.data(model.index(0, 2)) == "8h 30m"
    assert model.data(model.index(1, 1)) == "02:00"
    assert model.data(model.index(1, 0), Qt.ToolTipRole) == "Wraps past midnight"
    assert model.headerData(RangesTableModel.REMOVE_COLUMN, Qt.Horizontal) == "Remove"


def test_editing_row_is_highlighted(qt_core_app):
    model = RangesTableModel()
    model.update_ranges((TimeRange(9.0, 17.0),))
    assert model.data(model.index(0, 0), Qt.BackgroundRole) is None
    model.set_editing_index(0)
    assert model.data(model.index(0, 0), Qt.BackgroundRole) is not None


def test_shrinking_list_drops_stale_editing_row(qt_core_app):
    model = RangesTableModel()
    model.update_ranges((TimeRange(1.0, 2.0), TimeRange(3.0, 4.0)))
    model.set_editing_index(1)
    model.update_ranges((TimeRange(1.0, 2.0),))
    assert model.data(model.index(0, 0), Qt.BackgroundRole) is None
    assert model.range_for_row(1) is None
    assert NO_EDITING_INDEX == -1
