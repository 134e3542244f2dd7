"""Where TimeDial keeps its settings and logs on disk."""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path

APP_NAME = "timedial"
SETTINGS_FILENAME = "settings.json"
LOG_FILENAME = "timedial.log"
APP_ICON_FILENAME = "timedial.ico"

_data_dir_override: Path | None = None


def _platform_data_root() -> Path:
    # %APPDATA% on Windows, $XDG_DATA_HOME elsewhere, then the per-OS default.
    for variable in ("APPDATA", "XDG_DATA_HOME"):
        value = os.environ.get(variable)
        if value:
            return Path(value)
    if sys.platform == "win32":
        return Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path.home() / ".local" / "share"


def default_app_data_dir() -> Path:
    return _platform_data_root() / APP_NAME


def set_app_data_directory(path: Path | str | None) -> Path:
    """Use ``path`` as the data directory for the rest of the process; ``None`` restores the default."""
    global _data_dir_override
    _data_dir_override = Path(path).expanduser() if path else None
    app_data_dir.cache_clear()
    return app_data_dir()


@lru_cache(maxsize=1)
def app_data_dir() -> Path:
    directory = _data_dir_override or default_app_data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def settings_path() -> Path:
    return app_data_dir() / SETTINGS_FILENAME


def log_path() -> Path:
    return app_data_dir() / LOG_FILENAME


def ensure_app_structure() -> Path:
    return app_data_dir()


def default_downloads_dir() -> Path:
    """Exports land here unless the user picks another folder. Not created eagerly."""
    return Path.home() / "Downloads"


@lru_cache(maxsize=1)
def app_icon_path() -> Path | None:
    """Find the window icon in a frozen bundle or next to the source tree."""
    package_root = Path(__file__).resolve().parent.parent
    search_roots = [package_root, package_root.parent, package_root.parent.parent]
    bundle_root = getattr(sys, "_MEIPASS", None)
    if bundle_root:
        search_roots.insert(0, Path(bundle_root))
    for root in search_roots:
        for candidate in (root / APP_ICON_FILENAME, root / "resources" / APP_ICON_FILENAME):
            if candidate.is_file():
                return candidate
    return None
