"""Forward Qt's own diagnostics into Python logging."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QtMsgType, QMessageLogContext, qInstallMessageHandler

LOGGER = logging.getLogger("timedial.qt")

_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}

_previous_handler: Optional[Callable[[QtMsgType, QMessageLogContext, str], None]] = None
_installed = False


def install_qt_message_handler() -> None:
    global _installed, _previous_handler
    if _installed:
        return
    _previous_handler = qInstallMessageHandler(_handle_qt_message)
    _installed = True


def _handle_qt_message(msg_type: QtMsgType, context: QMessageLogContext, message: str) -> None:
    level = _LEVELS.get(msg_type, logging.WARNING)
    LOGGER.log(
        level,
        message,
        extra={"event": "qt_message", "qt_category": getattr(context, "category", None) or ""},
    )
    # Fatal messages must still reach Qt's default handler so the process aborts.
    if _previous_handler is not None and msg_type == QtMsgType.QtFatalMsg:
        _previous_handler(msg_type, context, message)
