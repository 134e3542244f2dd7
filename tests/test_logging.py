"""Tests for logging setup and the uncaught-exception hooks."""

import logging
import sys

from timedial.core import exception_logging
from timedial.core.logging_config import LOGGER_NAME, configure_logging, reset_logging


def test_configure_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "timedial.log"
    reset_logging(reconfigure=False)
    try:
        logger = configure_logging(path=log_file)
        logging.getLogger(f"{LOGGER_NAME}.store").info("hello", extra={"event": "test"})
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
        # A second call keeps the existing handlers.
        assert configure_logging(path=tmp_path / "other.log") is logger
        assert not (tmp_path / "other.log").exists()
    finally:
        reset_logging(reconfigure=False)


def test_exception_hook_install_is_reversible():
    original = sys.excepthook
    exception_logging.install_global_exception_logger()
    try:
        assert sys.excepthook is exception_logging._sys_hook
        exception_logging.install_global_exception_logger()
        assert exception_logging._previous_sys_hook is original
    finally:
        exception_logging.uninstall_global_exception_logger()
    assert sys.excepthook is original


def test_log_unhandled_records_critical(caplog, monkeypatch):
    # configure_logging stops propagation at the app logger; reopen it for caplog.
    monkeypatch.setattr(logging.getLogger(LOGGER_NAME), "propagate", True)
    caplog.set_level(logging.CRITICAL, logger="timedial.exceptions")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        exc_type, exc_value, exc_tb = sys.exc_info()
    exception_logging.log_unhandled(exc_type, exc_value, exc_tb)
    assert any(record.getMessage() == "Unhandled exception" for record in caplog.records)


def test_log_level_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("TIMEDIAL_LOG_LEVEL", "debug")
    reset_logging(reconfigure=False)
    try:
        logger = configure_logging(path=tmp_path / "timedial.log")
        assert logger.level == logging.DEBUG
    finally:
        reset_logging(reconfigure=False)
