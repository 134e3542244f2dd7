"""Theme-aware QtAwesome icons for the dial window."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Iterable, Mapping

import qtawesome as qta  # type: ignore[import]
from PySide6.QtGui import QIcon

from ..core.paths import app_icon_path


TRASH_ICON_NAMES: tuple[str, ...] = (
    "fa5s.trash",
    "fa5s.trash-alt",
    "mdi.trash-can-outline",
)

EDIT_ICON_NAMES: tuple[str, ...] = (
    "fa5s.pen",
    "fa5s.edit",
    "mdi.pencil",
)

CLEAR_ICON_NAMES: tuple[str, ...] = (
    "fa5s.eraser",
    "mdi.eraser",
    "mdi.notification-clear-all",
)

IMAGE_ICON_NAMES: tuple[str, ...] = (
    "fa5s.image",
    "fa5s.file-image",
    "mdi.image-outline",
)

EXPORT_ICON_NAMES: tuple[str, ...] = (
    "fa5s.file-export",
    "fa6s.file-export",
    "mdi.export",
)

SETTINGS_ICON_NAMES: tuple[str, ...] = (
    "fa5s.cog",
    "fa6s.gear",
    "mdi.cog-outline",
)


@dataclass(frozen=True)
class IconColor:
    normal: str
    active: str


@dataclass(frozen=True)
class IconPalette:
    roles: Mapping[str, IconColor] = field(default_factory=dict)

    def color_for(self, role: str) -> IconColor:
        if role in self.roles:
            return self.roles[role]
        raise KeyError(role)


_LOGGER = logging.getLogger("timedial.ui.icons")

DEFAULT_PALETTE = IconPalette(
    roles={
        "accent": IconColor(normal="#667eea", active="#4c5fd5"),
        "danger": IconColor(normal="#1f2937", active="#ef4444"),
        "control": IconColor(normal="#1f2937", active="#667eea"),
    }
)

_current_palette = DEFAULT_PALETTE
_palette_listeners: set[Callable[[], None]] = set()


def set_icon_palette(palette: IconPalette) -> None:
    global _current_palette
    if palette == _current_palette:
        return
    _current_palette = palette
    for callback in tuple(_palette_listeners):
        try:
            callback()
        except Exception:  # pragma: no cover - listeners should not break theme changes
            _LOGGER.exception("Icon palette listener failed")


def add_palette_listener(callback: Callable[[], None]) -> None:
    _palette_listeners.add(callback)


def remove_palette_listener(callback: Callable[[], None]) -> None:
    _palette_listeners.discard(callback)


@lru_cache(maxsize=1)
def app_icon() -> QIcon | None:
    icon_path = app_icon_path()
    if icon_path is not None:
        return QIcon(str(icon_path))
    return None


def _themed_icon(names: Iterable[str], size: int, role: str) -> QIcon:
    """Return the first glyph in ``names`` that QtAwesome can render."""
    try:
        colors = _current_palette.color_for(role)
    except KeyError:
        _LOGGER.warning("Missing icon role '%s' in palette; falling back to accent", role)
        colors = DEFAULT_PALETTE.color_for("accent")

    last_error: Exception | None = None
    for name in names:
        try:
            icon = qta.icon(name, color=colors.normal, color_active=colors.active)
        except Exception as exc:  # pragma: no cover - glyph sets differ between releases
            last_error = exc
            continue
        pixmap = icon.pixmap(size, size)
        if not pixmap.isNull():
            return QIcon(pixmap)

    message = f"QtAwesome icon lookup failed for {tuple(names)}"
    if last_error is not None:
        raise RuntimeError(message) from last_error
    raise RuntimeError(message)


def trash_icon(size: int = 18) -> QIcon:
    return _themed_icon(TRASH_ICON_NAMES, size, role="danger")


def edit_icon(size: int = 18) -> QIcon:
    return _themed_icon(EDIT_ICON_NAMES, size, role="control")


def clear_icon(size: int = 20) -> QIcon:
    return _themed_icon(CLEAR_ICON_NAMES, size, role="danger")


def image_icon(size: int = 20) -> QIcon:
    return _themed_icon(IMAGE_ICON_NAMES, size, role="accent")


def export_icon(size: int = 20) -> QIcon:
    return _themed_icon(EXPORT_ICON_NAMES, size, role="accent")


def settings_icon(size: int = 20) -> QIcon:
    """Gear icon for the settings button."""
    return _themed_icon(SETTINGS_ICON_NAMES, size, role="control")
