"""Main window: the dial on the left, the editable list of ranges on the right."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QModelIndex, QSize, Qt, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QStatusBar,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from ..core.controller import DialController
from ..core.exceptions import ExportError
from ..core.exporter import export_ranges
from ..core.settings import Settings
from .dial_painter import DialPalette
from .dial_widget import DialWidget
from .icons import (
    add_palette_listener,
    app_icon,
    clear_icon,
    export_icon,
    image_icon,
    remove_palette_listener,
    settings_icon,
)
from .image_export import save_schedule_image
from .range_edit_dialog import RangeEditDialog
from .ranges_model import RangesTableModel

LOGGER = logging.getLogger("timedial.ui.main")

EMPTY_STATE_TEXT = "No time ranges selected yet"


class MainWindow(QMainWindow):
    settings_requested = Signal()

    def __init__(self, controller: DialController, settings: Settings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("TimeDial")
        self.resize(1100, 680)
        icon = app_icon()
        if icon is not None:
            self.setWindowIcon(icon)

        self._controller = controller
        self._settings = settings
        self._model = RangesTableModel()

        self._build_ui()
        self._refresh_icons()
        add_palette_listener(self._refresh_icons)

        self._controller.ranges_changed.connect(self._refresh_ranges)
        self._controller.editing_index_changed.connect(self._model.set_editing_index)
        self._controller.message_raised.connect(self._show_status_message)
        self._refresh_ranges()

    # ------------------------------------------------------------------
    def apply_settings(self, settings: Settings) -> None:
        self._settings = settings
        self._dial.set_resize_debounce(settings.resize_debounce_ms)

    def set_dial_palette(self, palette: DialPalette) -> None:
        self._dial.set_dial_palette(palette)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        remove_palette_listener(self._refresh_icons)
        super().closeEvent(event)

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        central = QWidget(self)
        layout = QHBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(16)

        self._dial = DialWidget(self._controller, self._settings.resize_debounce_ms, central)
        layout.addWidget(self._dial, 3)

        side = QWidget(central)
        side_layout = QVBoxLayout(side)
        side_layout.setContentsMargins(0, 0, 0, 0)
        side_layout.setSpacing(10)

        heading = QLabel("Selected time ranges", side)
        heading.setStyleSheet("font-weight: 600; font-size: 15px;")
        side_layout.addWidget(heading)

        self._empty_label = QLabel(EMPTY_STATE_TEXT, side)
        self._empty_label.setObjectName("emptyState")
        self._empty_label.setAlignment(Qt.AlignCenter)
        side_layout.addWidget(self._empty_label)

        self._table = QTableView(side)
        self._table.setModel(self._model)
        self._table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self._table.setSelectionMode(QAbstractItemView.SingleSelection)
        self._table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self._table.setAlternatingRowColors(True)
        self._table.verticalHeader().setVisible(False)
        header = self._table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.Stretch)
        self._table.clicked.connect(self._on_table_clicked)
        self._table.doubleClicked.connect(self._on_table_double_clicked)
        side_layout.addWidget(self._table, 1)

        buttons = QHBoxLayout()
        buttons.setSpacing(8)
        self._clear_button = QPushButton("Clear All", side)
        self._clear_button.clicked.connect(self._on_clear_clicked)
        self._export_button = QPushButton("Export Data", side)
        self._export_button.clicked.connect(self._on_export_clicked)
        self._image_button = QPushButton("Download Image", side)
        self._image_button.clicked.connect(self._on_image_clicked)
        self._settings_button = QPushButton("Settings", side)
        self._settings_button.clicked.connect(self.settings_requested.emit)
        for button in (self._clear_button, self._export_button, self._image_button, self._settings_button):
            button.setIconSize(QSize(18, 18))
            buttons.addWidget(button)
        side_layout.addLayout(buttons)

        layout.addWidget(side, 2)
        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar(self))

    def _refresh_icons(self) -> None:
        self._clear_button.setIcon(clear_icon())
        self._export_button.setIcon(export_icon())
        self._image_button.setIcon(image_icon())
        self._settings_button.setIcon(settings_icon())

    def _refresh_ranges(self) -> None:
        ranges = self._controller.snapshot()
        self._model.update_ranges(ranges)
        self._model.set_editing_index(self._controller.editing_index)
        has_ranges = bool(ranges)
        self._empty_label.setVisible(not has_ranges)
        self._table.setVisible(has_ranges)
        for button in (self._clear_button, self._export_button, self._image_button):
            button.setEnabled(has_ranges)
        total = sum(time_range.duration for time_range in ranges)
        self.statusBar().showMessage(f"{len(ranges)} range(s), {total:g} hours selected")

    # ------------------------------------------------------------------
    def _on_table_clicked(self, index: QModelIndex) -> None:
        if not self._is_current_row(index):
            return
        if index.column() == RangesTableModel.REMOVE_COLUMN:
            self._controller.remove_range(index.row())
        elif index.column() == RangesTableModel.EDIT_COLUMN:
            self._open_edit_dialog(index.row())

    def _on_table_double_clicked(self, index: QModelIndex) -> None:
        if self._is_current_row(index) and index.column() < RangesTableModel.EDIT_COLUMN:
            self._open_edit_dialog(index.row())

    def _is_current_row(self, index: QModelIndex) -> bool:
        if not index.isValid():
            return False
        shown = self._model.range_for_row(index.row())
        snapshot = self._controller.snapshot()
        # The table can lag one event behind the store.
        if shown is None or index.row() >= len(snapshot) or snapshot[index.row()] != shown:
            LOGGER.debug("Ignoring click on stale row", extra={"event": "ranges_table_stale_row", "row": index.row()})
            return False
        return True

    def _open_edit_dialog(self, row: int) -> None:
        dialog = RangeEditDialog(self._controller, row, parent=self)
        dialog.exec()

    def _on_clear_clicked(self) -> None:
        if self._settings.confirm_clear:
            answer = QMessageBox.question(
                self,
                "Clear all ranges",
                "Are you sure you want to clear all time ranges?",
                QMessageBox.Yes | QMessageBox.No,
                QMessageBox.No,
            )
            if answer != QMessageBox.Yes:
                return
        self._controller.clear_ranges()

    def _on_export_clicked(self) -> None:
        try:
            path = export_ranges(
                self._controller.snapshot(),
                self._settings.export_format,
                Path(self._settings.export_path),
            )
        except ExportError as exc:
            LOGGER.warning("Data export failed: %s", exc)
            QMessageBox.warning(self, "Export failed", str(exc))
            return
        self._show_status_message(f"Exported to {path}")

    def _on_image_clicked(self) -> None:
        try:
            path = save_schedule_image(
                self._controller.snapshot(),
                self._settings.image_title,
                Path(self._settings.export_path),
            )
        except ExportError as exc:
            LOGGER.warning("Image export failed: %s", exc)
            QMessageBox.warning(self, "Image export failed", str(exc))
            return
        self._show_status_message(f"Image saved to {path}")

    def _show_status_message(self, message: str) -> None:
        self.statusBar().showMessage(message, 8000)
