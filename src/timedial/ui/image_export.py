"""Render a shareable PNG of the dial with the list of ranges underneath."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Sequence

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QFont, QImage, QPainter

from ..core.controller import RenderState
from ..core.exceptions import ExportError
from ..core.exporter import default_export_filename
from ..core.gestures import IDLE
from ..core.models import TimeRange
from .dial_painter import LIGHT_DIAL_PALETTE, paint_dial

LOGGER = logging.getLogger("timedial.ui.image_export")

IMAGE_WIDTH = 1000
IMAGE_HEIGHT = 1100
DIAL_SIZE = 750
DIAL_TOP = 100
LIST_TOP = 950
LIST_LINE_HEIGHT = 30


def render_schedule_image(ranges: Sequence[TimeRange], title: str) -> QImage:
    # Rows beyond the canvas grow the image instead of being clipped.
    list_bottom = LIST_TOP + 40 + LIST_LINE_HEIGHT * len(ranges)
    image = QImage(IMAGE_WIDTH, max(IMAGE_HEIGHT, list_bottom + 20), QImage.Format_ARGB32)
    image.fill(QColor("white"))

    painter = QPainter(image)
    try:
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setRenderHint(QPainter.TextAntialiasing, True)

        title_font = QFont("Arial")
        title_font.setBold(True)
        title_font.setPixelSize(36)
        painter.setFont(title_font)
        painter.setPen(QColor(LIGHT_DIAL_PALETTE.accent))
        painter.drawText(QRectF(0, 20, IMAGE_WIDTH, 50), Qt.AlignCenter, title)

        dial_rect = QRectF((IMAGE_WIDTH - DIAL_SIZE) / 2, DIAL_TOP, DIAL_SIZE, DIAL_SIZE)
        paint_dial(painter, dial_rect, RenderState(ranges=tuple(ranges), gesture=IDLE, preview=None))

        if ranges:
            heading_font = QFont("Arial")
            heading_font.setBold(True)
            heading_font.setPixelSize(24)
            painter.setFont(heading_font)
            painter.setPen(QColor("#333333"))
            painter.drawText(QRectF(0, LIST_TOP - 25, IMAGE_WIDTH, 35), Qt.AlignCenter, "Selected Time Ranges:")

            row_font = QFont("Arial")
            row_font.setPixelSize(20)
            painter.setFont(row_font)
            y_pos = LIST_TOP + 20
            for time_range in ranges:
                painter.drawText(QRectF(0, y_pos, IMAGE_WIDTH, LIST_LINE_HEIGHT), Qt.AlignCenter, time_range.label)
                y_pos += LIST_LINE_HEIGHT
    finally:
        painter.end()
    return image


def save_schedule_image(ranges: Sequence[TimeRange], title: str, directory: Path, now: datetime | None = None) -> Path:
    snapshot = tuple(ranges)
    if not snapshot:
        raise ExportError("No time ranges to export")
    directory = Path(directory).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / default_export_filename(".png", now)
    image = render_schedule_image(snapshot, title)
    if not image.save(str(path), "PNG"):
        LOGGER.error("Failed to write image", extra={"event": "image_export_failed", "path": str(path)})
        raise ExportError(f"Unable to save image to {path}")
    LOGGER.info("Image exported", extra={"event": "image_exported", "path": str(path), "ranges": len(snapshot)})
    return path
