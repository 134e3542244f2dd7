"""Application controller wiring all services together."""

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication, QDialog, QMessageBox  # type: ignore[import]

from .core.controller import DialController
from .core.exception_logging import install_global_exception_logger
from .core.exceptions import SettingsError
from .core.logging_config import configure_logging
from .core.paths import ensure_app_structure
from .core.settings import Settings, SettingsManager
from .ui.icons import app_icon
from .ui.main_window import MainWindow
from .ui.qt_message_handler import install_qt_message_handler
from .ui.settings_dialog import SettingsDialog
from .ui.theme_manager import ThemeManager

LOGGER = logging.getLogger("timedial.app")


class ApplicationController:
    def __init__(self, app: QApplication, log_level: int | str = logging.INFO) -> None:
        self._app = app
        ensure_app_structure()
        configure_logging(log_level)
        install_global_exception_logger()
        install_qt_message_handler()

        self._settings_manager = SettingsManager()
        try:
            self._settings = self._settings_manager.load()
        except SettingsError as exc:
            LOGGER.exception("Failed to load settings; using defaults")
            QMessageBox.warning(None, "Settings error", str(exc))
            self._settings = Settings()

        self._theme_manager = ThemeManager(app)
        self._theme_manager.apply(self._settings.theme)

        self._dial_controller = DialController(self._settings, parent=app)
        self._main_window = MainWindow(self._dial_controller, self._settings)
        self._main_window.set_dial_palette(ThemeManager.dial_palette_for(self._settings.theme))
        self._apply_window_icon()
        self._main_window.settings_requested.connect(self._open_settings_dialog)
        self._main_window.show()

    def _open_settings_dialog(self) -> None:
        dialog = SettingsDialog(self._settings, parent=self._main_window)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return
        new_settings = dialog.updated_settings

        try:
            self._settings_manager.save(new_settings)
        except SettingsError as exc:
            LOGGER.exception("Unable to persist settings")
            QMessageBox.critical(self._main_window, "Settings error", str(exc))
            return

        self._apply_settings_update(new_settings)

    def _apply_settings_update(self, new_settings: Settings) -> None:
        if new_settings.theme != self._settings.theme:
            self._theme_manager.apply(new_settings.theme)
            self._main_window.set_dial_palette(ThemeManager.dial_palette_for(new_settings.theme))
        self._settings = new_settings
        self._dial_controller.apply_settings(new_settings)
        self._main_window.apply_settings(new_settings)

    def _apply_window_icon(self) -> None:
        icon = app_icon()
        if icon is not None:
            self._app.setWindowIcon(icon)
            self._main_window.setWindowIcon(icon)


def run_app(argv: list[str] | None = None, log_level: int | str = logging.INFO) -> int:
    qt_args = argv if argv is not None else sys.argv
    app = QApplication(qt_args)
    controller = ApplicationController(app, log_level)  # noqa: F841 - keeps the window alive for exec()
    return app.exec()
