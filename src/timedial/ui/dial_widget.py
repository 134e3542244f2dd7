"""Interactive dial surface: turns mouse and touch input into dial angles."""

from __future__ import annotations

import logging
import math

from PySide6.QtCore import QEvent, QPointF, QRectF, QSize, QTimer, Qt
from PySide6.QtGui import QMouseEvent, QPainter, QPaintEvent, QResizeEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from ..core.controller import DialController
from .dial_painter import LIGHT_DIAL_PALETTE, DialPalette, dial_geometry, paint_dial

LOGGER = logging.getLogger("timedial.ui.dial")


class DialWidget(QWidget):
    def __init__(
        self,
        controller: DialController,
        resize_debounce_ms: int = 150,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._palette = LIGHT_DIAL_PALETTE
        self.setAttribute(Qt.WA_AcceptTouchEvents, True)
        self.setMouseTracking(False)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumSize(240, 240)

        self._resize_timer = QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(resize_debounce_ms)
        self._resize_timer.timeout.connect(self._apply_surface_width)

        self._controller.redraw_requested.connect(self.update)

    def sizeHint(self) -> QSize:  # type: ignore[override]
        return QSize(560, 560)

    def set_dial_palette(self, palette: DialPalette) -> None:
        self._palette = palette
        self.update()

    def set_resize_debounce(self, milliseconds: int) -> None:
        self._resize_timer.setInterval(milliseconds)

    def angle_at(self, position: QPointF) -> float:
        """Bearing of ``position`` around the dial centre in degrees, clockwise from 3 o'clock."""
        center, _radius = dial_geometry(QRectF(self.rect()))
        return math.degrees(math.atan2(position.y() - center.y(), position.x() - center.x()))

    # ------------------------------------------------------------------
    def paintEvent(self, event: QPaintEvent) -> None:  # type: ignore[override]
        painter = QPainter(self)
        try:
            paint_dial(painter, QRectF(self.rect()), self._controller.render_state(), self._palette)
        finally:
            painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        self._controller.pointer_pressed(self.angle_at(event.position()))
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.buttons() & Qt.LeftButton:
            self._controller.pointer_moved(self.angle_at(event.position()))
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() != Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        self._controller.pointer_released()
        event.accept()

    def leaveEvent(self, event: QEvent) -> None:  # type: ignore[override]
        self._controller.pointer_left()
        super().leaveEvent(event)

    def event(self, event: QEvent) -> bool:  # type: ignore[override]
        kind = event.type()
        if kind in (QEvent.TouchBegin, QEvent.TouchUpdate, QEvent.TouchEnd, QEvent.TouchCancel):
            self._handle_touch(event)
            return True
        return super().event(event)

    def resizeEvent(self, event: QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._resize_timer.start()

    # ------------------------------------------------------------------
    def _handle_touch(self, event) -> None:
        kind = event.type()
        if kind == QEvent.TouchCancel:
            self._controller.pointer_left()
            event.accept()
            return
        if kind == QEvent.TouchEnd:
            self._controller.pointer_released()
            event.accept()
            return
        points = event.points()
        if not points:
            return
        angle = self.angle_at(points[0].position())
        if kind == QEvent.TouchBegin:
            self._controller.pointer_pressed(angle)
        else:
            self._controller.pointer_moved(angle)
        event.accept()

    def _apply_surface_width(self) -> None:
        LOGGER.debug("Dial resized", extra={"event": "dial_resized", "width": self.width()})
        self._controller.set_surface_width(self.width())
        self.update()
