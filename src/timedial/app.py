"""Command-line entry point for TimeDial."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from . import __version__
from .app_controller import run_app
from .core.paths import set_app_data_directory

LOGGER = logging.getLogger("timedial.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="timedial", description="Draw daily time ranges on a 24-hour dial.")
    parser.add_argument("--data-dir", help="Directory for settings and logs (defaults to the per-user data folder)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level for the log file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    raw_args = list(argv) if argv is not None else sys.argv[1:]
    # Qt consumes its own switches (e.g. -style); leave them in place for QApplication.
    options, qt_args = build_parser().parse_known_args(raw_args)
    if options.data_dir:
        set_app_data_directory(options.data_dir)

    LOGGER.info("Starting TimeDial", extra={"event": "app_start", "version": __version__})
    try:
        exit_code = run_app([sys.argv[0], *qt_args], log_level=options.log_level)
    except Exception:
        LOGGER.exception("Fatal error during application execution", extra={"event": "app_crash"})
        return 1
    LOGGER.info("TimeDial exited", extra={"event": "app_exit", "code": exit_code})
    return exit_code
