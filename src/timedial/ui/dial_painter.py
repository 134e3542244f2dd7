"""Stateless painting of the 24-hour dial from a controller render state."""

from __future__ import annotations

import math
from dataclasses import dataclass

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPainterPath, QPen

from ..core.controller import RenderState
from ..core.models import TimeRange
from ..core.quantizer import DEGREES_PER_HOUR, HOURS_PER_DAY, QUARTERS_PER_HOUR, hour_to_angle

# Proportions of the reference 1000px canvas with a 440px radius.
_REFERENCE_RADIUS = 440.0
_RANGE_OUTER_INSET = 30.0
_RANGE_INNER_RADIUS = 60.0
_LABEL_INSET = 50.0
_CENTER_DOT_RADIUS = 15.0


@dataclass(frozen=True)
class DialPalette:
    face: str = "#f8f9fa"
    accent: str = "#667eea"
    label: str = "#333333"
    range_fill: str = "rgba(102, 126, 234, 0.6)"
    preview_fill: str = "rgba(102, 126, 234, 0.3)"
    editing_fill: str = "rgba(239, 68, 68, 0.45)"


LIGHT_DIAL_PALETTE = DialPalette()
DARK_DIAL_PALETTE = DialPalette(face="#2b2d31", accent="#8fa2ff", label="#f0f0f0")


def _color(value: str) -> QColor:
    if value.startswith("rgba("):
        red, green, blue, alpha = (part.strip() for part in value[5:-1].split(","))
        return QColor(int(red), int(green), int(blue), int(round(float(alpha) * 255)))
    return QColor(value)


def dial_geometry(rect: QRectF) -> tuple[QPointF, float]:
    """Centre and radius of the dial drawn inside ``rect``."""
    radius = min(rect.width(), rect.height()) / 2 * (_REFERENCE_RADIUS / 500.0)
    return rect.center(), radius


def range_arc(time_range: TimeRange) -> tuple[float, float]:
    """Start bearing and clockwise sweep of ``time_range``, both in degrees."""
    return hour_to_angle(time_range.start), time_range.duration * DEGREES_PER_HOUR


def paint_dial(painter: QPainter, rect: QRectF, state: RenderState, palette: DialPalette = LIGHT_DIAL_PALETTE) -> None:
    center, radius = dial_geometry(rect)
    scale = radius / _REFERENCE_RADIUS
    accent = _color(palette.accent)

    painter.save()
    painter.setRenderHint(QPainter.Antialiasing, True)

    painter.setPen(QPen(accent, 4 * scale))
    painter.setBrush(_color(palette.face))
    painter.drawEllipse(center, radius, radius)

    for index, time_range in enumerate(state.ranges):
        fill = palette.editing_fill if index == state.editing_index else palette.range_fill
        _paint_range(painter, center, radius, scale, time_range, _color(fill), accent)

    _paint_ticks(painter, center, radius, scale, accent)
    _paint_labels(painter, center, radius, scale, _color(palette.label))

    if state.preview is not None:
        _paint_range(painter, center, radius, scale, state.preview, _color(palette.preview_fill), accent)

    painter.setPen(Qt.NoPen)
    painter.setBrush(accent)
    painter.drawEllipse(center, _CENTER_DOT_RADIUS * scale, _CENTER_DOT_RADIUS * scale)
    painter.restore()


def _paint_range(
    painter: QPainter,
    center: QPointF,
    radius: float,
    scale: float,
    time_range: TimeRange,
    fill: QColor,
    outline: QColor,
) -> None:
    outer = radius - _RANGE_OUTER_INSET * scale
    inner = _RANGE_INNER_RADIUS * scale
    start_deg, sweep_deg = range_arc(time_range)

    outer_rect = QRectF(center.x() - outer, center.y() - outer, outer * 2, outer * 2)
    inner_rect = QRectF(center.x() - inner, center.y() - inner, inner * 2, inner * 2)

    # Qt measures arcs counter-clockwise while dial angles grow clockwise.
    path = QPainterPath()
    path.arcMoveTo(outer_rect, -start_deg)
    path.arcTo(outer_rect, -start_deg, -sweep_deg)
    path.arcTo(inner_rect, -(start_deg + sweep_deg), sweep_deg)
    path.closeSubpath()

    painter.setPen(QPen(outline, 2 * scale))
    painter.setBrush(fill)
    painter.drawPath(path)


def _paint_ticks(painter: QPainter, center: QPointF, radius: float, scale: float, color: QColor) -> None:
    quarters = HOURS_PER_DAY * QUARTERS_PER_HOUR
    for quarter in range(quarters):
        angle = math.radians(hour_to_angle(quarter / QUARTERS_PER_HOUR))
        if quarter % QUARTERS_PER_HOUR == 0:
            inner_inset = 20
            hour = quarter // QUARTERS_PER_HOUR
            width = 4 if hour % 6 == 0 else 2
        elif quarter % 2 == 0:
            inner_inset, width = 15, 2
        else:
            inner_inset, width = 12, 1
        inner = radius - inner_inset * scale
        outer = radius - 5 * scale
        painter.setPen(QPen(color, width * scale))
        painter.drawLine(
            QPointF(center.x() + inner * math.cos(angle), center.y() + inner * math.sin(angle)),
            QPointF(center.x() + outer * math.cos(angle), center.y() + outer * math.sin(angle)),
        )


def _paint_labels(painter: QPainter, center: QPointF, radius: float, scale: float, color: QColor) -> None:
    font = QFont("Arial")
    font.setBold(True)
    font.setPixelSize(max(8, int(round(20 * scale))))
    painter.setFont(font)
    painter.setPen(color)
    label_radius = radius - _LABEL_INSET * scale
    box = 40 * scale
    for hour in range(HOURS_PER_DAY):
        angle = math.radians(hour_to_angle(hour))
        x = center.x() + label_radius * math.cos(angle)
        y = center.y() + label_radius * math.sin(angle)
        painter.drawText(QRectF(x - box / 2, y - box / 2, box, box), Qt.AlignCenter, str(hour))
