"""Settings dialog for TimeDial."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QDoubleSpinBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QWidget,
)

from ..core.exceptions import SettingsError
from ..core.exporter import ExportFormat
from ..core.paths import default_downloads_dir
from ..core.settings import MAX_RESIZE_DEBOUNCE_MS, MAX_TOLERANCE_HOURS, Settings, Theme, validate_settings
from .icons import app_icon

LOGGER = logging.getLogger("timedial.ui.settings")

_FORMAT_LABELS = {
    ExportFormat.JSON: "JSON",
    ExportFormat.JSONL: "JSON Lines",
    ExportFormat.CSV: "CSV",
    ExportFormat.EXCEL: "Excel workbook",
}


class SettingsDialog(QDialog):
    def __init__(self, current_settings: Settings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        icon = app_icon()
        if icon is not None:
            self.setWindowIcon(icon)
        self._initial_settings = current_settings
        self._result_settings: Settings | None = None
        self.resize(480, 0)

        layout = QFormLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        self._theme_combo = QComboBox(self)
        for theme in Theme:
            self._theme_combo.addItem(theme.value.title(), theme.value)
        layout.addRow("Theme", self._theme_combo)

        self._tolerance_spin = self._tolerance_control(
            "How close (in hours) a click must be to an endpoint to grab it"
        )
        layout.addRow("Endpoint grab distance", self._tolerance_spin)

        self._touch_tolerance_spin = self._tolerance_control(
            "Grab distance used on narrow (touch-sized) dials"
        )
        layout.addRow("Touch grab distance", self._touch_tolerance_spin)

        self._compact_width_spin = QSpinBox(self)
        self._compact_width_spin.setRange(0, 10_000)
        self._compact_width_spin.setSuffix(" px")
        self._compact_width_spin.setToolTip("Dials narrower than this use the touch grab distance")
        layout.addRow("Touch layout below", self._compact_width_spin)

        self._restore_checkbox = QCheckBox("Undo a drag edit when the pointer leaves the dial", self)
        layout.addRow("Cancelled edits", self._restore_checkbox)

        self._confirm_clear_checkbox = QCheckBox("Ask before clearing all ranges", self)
        layout.addRow("Clear all", self._confirm_clear_checkbox)

        self._title_edit = QLineEdit(self)
        layout.addRow("Image title", self._title_edit)

        self._format_combo = QComboBox(self)
        for fmt, label in _FORMAT_LABELS.items():
            self._format_combo.addItem(label, fmt.value)
        layout.addRow("Export format", self._format_combo)

        export_row = QWidget(self)
        export_layout = QHBoxLayout(export_row)
        export_layout.setContentsMargins(0, 0, 0, 0)
        export_layout.setSpacing(8)
        self._export_path_edit = QLineEdit(self)
        export_layout.addWidget(self._export_path_edit, 1)
        browse_button = QPushButton("Browse…", self)
        browse_button.clicked.connect(self._on_browse_clicked)
        export_layout.addWidget(browse_button)
        layout.addRow("Export folder", export_row)

        self._debounce_spin = QSpinBox(self)
        self._debounce_spin.setRange(0, MAX_RESIZE_DEBOUNCE_MS)
        self._debounce_spin.setSingleStep(50)
        self._debounce_spin.setSuffix(" ms")
        layout.addRow("Resize delay", self._debounce_spin)

        self._error_label = QLabel("", self)
        self._error_label.setStyleSheet("color: #ef4444;")
        self._error_label.setWordWrap(True)
        layout.addRow(self._error_label)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel, self)
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

        self._apply_settings_to_fields(current_settings)

        self._theme_combo.currentIndexChanged.connect(self._clear_error)
        self._tolerance_spin.valueChanged.connect(lambda _value: self._clear_error())
        self._touch_tolerance_spin.valueChanged.connect(lambda _value: self._clear_error())
        self._title_edit.textChanged.connect(self._clear_error)
        self._export_path_edit.textChanged.connect(self._clear_error)

    @property
    def updated_settings(self) -> Settings:
        return self._result_settings or self._initial_settings

    # ------------------------------------------------------------------
    def _tolerance_control(self, tooltip: str) -> QDoubleSpinBox:
        spin = QDoubleSpinBox(self)
        spin.setDecimals(2)
        spin.setRange(0.25, MAX_TOLERANCE_HOURS - 0.25)
        spin.setSingleStep(0.25)
        spin.setSuffix(" h")
        spin.setToolTip(tooltip)
        return spin

    def _apply_settings_to_fields(self, settings: Settings) -> None:
        index = self._theme_combo.findData(settings.theme.value)
        self._theme_combo.setCurrentIndex(max(0, index))
        self._tolerance_spin.setValue(settings.hit_tolerance_hours)
        self._touch_tolerance_spin.setValue(settings.touch_hit_tolerance_hours)
        self._compact_width_spin.setValue(settings.compact_width_px)
        self._restore_checkbox.setChecked(settings.restore_edit_on_cancel)
        self._confirm_clear_checkbox.setChecked(settings.confirm_clear)
        self._title_edit.setText(settings.image_title)
        format_index = self._format_combo.findData(settings.export_format.value)
        self._format_combo.setCurrentIndex(max(0, format_index))
        self._export_path_edit.setText(settings.export_path)
        self._debounce_spin.setValue(settings.resize_debounce_ms)

    def _on_browse_clicked(self) -> None:
        start_dir = self._export_path_edit.text().strip() or str(default_downloads_dir())
        chosen = QFileDialog.getExistingDirectory(self, "Choose export folder", start_dir)
        if chosen:
            self._export_path_edit.setText(chosen)

    def _on_accept(self) -> None:
        try:
            new_settings = Settings(
                theme=Theme(self._theme_combo.currentData()),
                hit_tolerance_hours=self._tolerance_spin.value(),
                touch_hit_tolerance_hours=self._touch_tolerance_spin.value(),
                compact_width_px=self._compact_width_spin.value(),
                restore_edit_on_cancel=self._restore_checkbox.isChecked(),
                confirm_clear=self._confirm_clear_checkbox.isChecked(),
                export_path=self._export_path_edit.text().strip() or str(default_downloads_dir()),
                export_format=ExportFormat(self._format_combo.currentData()),
                image_title=self._title_edit.text().strip(),
                resize_debounce_ms=self._debounce_spin.value(),
            )
            validate_settings(new_settings)
        except SettingsError as exc:
            LOGGER.warning("Settings validation failed: %s", exc)
            self._error_label.setText(str(exc))
            return
        except Exception as exc:  # pragma: no cover - unexpected errors
            LOGGER.exception("Unable to build settings")
            QMessageBox.critical(self, "Error", str(exc))
            return

        self._result_settings = new_settings
        self.accept()

    def _clear_error(self) -> None:
        self._error_label.clear()
