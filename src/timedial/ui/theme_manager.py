"""Light and dark themes: application palette, stylesheet, icons and dial colours."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication

from ..core.settings import Theme
from .dial_painter import DARK_DIAL_PALETTE, LIGHT_DIAL_PALETTE, DialPalette
from .icons import IconColor, IconPalette, set_icon_palette

LOGGER = logging.getLogger("timedial.ui.theme")


@dataclass(frozen=True)
class ThemeColors:
    window: str
    surface: str
    alternate: str
    header: str
    border: str
    text: str
    muted: str
    highlight: str
    dial: DialPalette
    icons: IconPalette


_STYLESHEET_TEMPLATE = """
QWidget {{ background-color: {window}; color: {text}; }}
QPushButton {{ padding: 6px 14px; border-radius: 4px; }}
QTableView {{ background-color: {surface}; alternate-background-color: {alternate}; gridline-color: {border}; }}
QTableView::item {{ padding: 6px 12px; }}
QHeaderView::section {{ background-color: {header}; color: {text}; padding: 4px 12px; border: none; }}
QStatusBar {{ background-color: {alternate}; }}
QLineEdit, QComboBox, QSpinBox, QDoubleSpinBox, QTimeEdit {{ background-color: {surface}; border: 1px solid {border}; border-radius: 4px; padding: 4px; }}
QLabel#emptyState {{ color: {muted}; font-style: italic; }}
"""

THEMES: dict[Theme, ThemeColors] = {
    Theme.LIGHT: ThemeColors(
        window="#f5f6f8",
        surface="#ffffff",
        alternate="#f1f1f1",
        header="#ebedf0",
        border="#d0d0d0",
        text="#1f2937",
        muted="#6b7280",
        highlight="#667eea",
        dial=LIGHT_DIAL_PALETTE,
        icons=IconPalette(
            roles={
                "accent": IconColor(normal="#667eea", active="#4c5fd5"),
                "danger": IconColor(normal="#1f2937", active="#ef4444"),
                "control": IconColor(normal="#1f2937", active="#667eea"),
            }
        ),
    ),
    Theme.DARK: ThemeColors(
        window="#1e1f22",
        surface="#2b2d31",
        alternate="#1f2023",
        header="#323438",
        border="#3c3f45",
        text="#f0f0f0",
        muted="#9ca3af",
        highlight="#3a506b",
        dial=DARK_DIAL_PALETTE,
        icons=IconPalette(
            roles={
                "accent": IconColor(normal="#8fa2ff", active="#b4c1ff"),
                "danger": IconColor(normal="#f87171", active="#fca5a5"),
                "control": IconColor(normal="#e5e7eb", active="#8fa2ff"),
            }
        ),
    ),
}


def build_stylesheet(colors: ThemeColors) -> str:
    return _STYLESHEET_TEMPLATE.format(
        window=colors.window,
        surface=colors.surface,
        alternate=colors.alternate,
        header=colors.header,
        border=colors.border,
        text=colors.text,
        muted=colors.muted,
    )


def build_qpalette(colors: ThemeColors) -> QPalette:
    palette = QPalette()
    for role, value in (
        (QPalette.Window, colors.window),
        (QPalette.WindowText, colors.text),
        (QPalette.Base, colors.surface),
        (QPalette.AlternateBase, colors.alternate),
        (QPalette.Text, colors.text),
        (QPalette.Button, colors.surface),
        (QPalette.ButtonText, colors.text),
        (QPalette.Highlight, colors.highlight),
        (QPalette.HighlightedText, "#ffffff"),
    ):
        palette.setColor(role, QColor(value))
    return palette


class ThemeManager:
    def __init__(self, app: QApplication) -> None:
        self._app = app
        self._current: Theme | None = None

    def apply(self, theme: Theme) -> None:
        if theme == self._current:
            return
        LOGGER.info("Applying theme", extra={"event": "ui_theme_apply", "theme": theme.value})
        colors = THEMES[theme]
        self._app.setPalette(build_qpalette(colors))
        self._app.setStyleSheet(build_stylesheet(colors))
        set_icon_palette(colors.icons)
        self._current = theme

    def current(self) -> Theme | None:
        return self._current

    @staticmethod
    def dial_palette_for(theme: Theme) -> DialPalette:
        return THEMES[theme].dial
