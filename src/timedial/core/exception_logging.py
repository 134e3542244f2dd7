"""Route uncaught exceptions into the application log."""

from __future__ import annotations

import logging
import sys
import threading
from types import TracebackType
from typing import Callable, Optional, Type

_LOGGER = logging.getLogger("timedial.exceptions")

_ExcHook = Callable[[Type[BaseException], BaseException, Optional[TracebackType]], None]

_previous_sys_hook: _ExcHook | None = None
_previous_thread_hook: Callable[[threading.ExceptHookArgs], None] | None = None


def log_unhandled(
    exc_type: Type[BaseException],
    exc_value: BaseException,
    exc_traceback: Optional[TracebackType],
    *,
    thread_name: str | None = None,
) -> None:
    _LOGGER.critical(
        "Unhandled exception",
        exc_info=(exc_type, exc_value, exc_traceback),
        extra={"event": "unhandled_exception", "origin_thread": thread_name or threading.current_thread().name},
    )


def _sys_hook(
    exc_type: Type[BaseException],
    exc_value: BaseException,
    exc_traceback: Optional[TracebackType],
) -> None:
    if not issubclass(exc_type, KeyboardInterrupt):
        log_unhandled(exc_type, exc_value, exc_traceback)
    chained = _previous_sys_hook or sys.__excepthook__
    chained(exc_type, exc_value, exc_traceback)


def _thread_hook(args: threading.ExceptHookArgs) -> None:  # pragma: no cover - trivial wrapper
    if not issubclass(args.exc_type, KeyboardInterrupt):
        thread_name = args.thread.name if args.thread is not None else None
        log_unhandled(args.exc_type, args.exc_value, args.exc_traceback, thread_name=thread_name)
    if _previous_thread_hook is not None:
        _previous_thread_hook(args)


def install_global_exception_logger() -> None:
    """Log uncaught exceptions from the main thread and worker threads, then chain on."""
    global _previous_sys_hook, _previous_thread_hook
    if sys.excepthook is _sys_hook:
        return
    _previous_sys_hook = sys.excepthook
    _previous_thread_hook = threading.excepthook
    sys.excepthook = _sys_hook
    threading.excepthook = _thread_hook


def uninstall_global_exception_logger() -> None:
    global _previous_sys_hook, _previous_thread_hook
    if sys.excepthook is not _sys_hook:
        return
    sys.excepthook = _previous_sys_hook or sys.__excepthook__
    threading.excepthook = _previous_thread_hook or threading.__excepthook__
    _previous_sys_hook = None
    _previous_thread_hook = None
