"""Settings management for TimeDial."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .exceptions import SettingsError
from .exporter import ExportFormat
from .hit_testing import select_tolerance
from .paths import default_downloads_dir, ensure_app_structure, settings_path
from .quantizer import QUARTER_HOUR


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


DEFAULT_HIT_TOLERANCE_HOURS = 0.5
DEFAULT_TOUCH_HIT_TOLERANCE_HOURS = 1.0
DEFAULT_COMPACT_WIDTH_PX = 600
DEFAULT_IMAGE_TITLE = "Time Ranges"
DEFAULT_RESIZE_DEBOUNCE_MS = 150
MAX_TOLERANCE_HOURS = 12.0
MAX_RESIZE_DEBOUNCE_MS = 5000

_SUPPORTED_THEMES = {member.value for member in Theme}
_SUPPORTED_EXPORT_FORMATS = {member.value for member in ExportFormat}


@dataclass(slots=True)
class Settings:
    theme: Theme = Theme.LIGHT
    hit_tolerance_hours: float = DEFAULT_HIT_TOLERANCE_HOURS
    touch_hit_tolerance_hours: float = DEFAULT_TOUCH_HIT_TOLERANCE_HOURS
    compact_width_px: int = DEFAULT_COMPACT_WIDTH_PX
    restore_edit_on_cancel: bool = True
    confirm_clear: bool = True
    export_path: str = field(default_factory=lambda: str(default_downloads_dir()))
    export_format: ExportFormat = ExportFormat.JSON
    image_title: str = DEFAULT_IMAGE_TITLE
    resize_debounce_ms: int = DEFAULT_RESIZE_DEBOUNCE_MS

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["theme"] = self.theme.value
        payload["export_format"] = self.export_format.value
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Settings":
        theme_value = str(payload.get("theme", Theme.LIGHT.value)).lower()
        if theme_value not in _SUPPORTED_THEMES:
            raise SettingsError(f"Unsupported theme: {theme_value}")
        format_value = str(payload.get("export_format", ExportFormat.JSON.value)).lower()
        if format_value not in _SUPPORTED_EXPORT_FORMATS:
            raise SettingsError(f"Unsupported export format: {format_value}")

        settings = cls(
            theme=Theme(theme_value),
            hit_tolerance_hours=float(payload.get("hit_tolerance_hours", DEFAULT_HIT_TOLERANCE_HOURS)),
            touch_hit_tolerance_hours=float(
                payload.get("touch_hit_tolerance_hours", DEFAULT_TOUCH_HIT_TOLERANCE_HOURS)
            ),
            compact_width_px=int(payload.get("compact_width_px", DEFAULT_COMPACT_WIDTH_PX)),
            restore_edit_on_cancel=bool(payload.get("restore_edit_on_cancel", True)),
            confirm_clear=bool(payload.get("confirm_clear", True)),
            export_path=str(payload.get("export_path") or default_downloads_dir()).strip(),
            export_format=ExportFormat(format_value),
            image_title=str(payload.get("image_title", DEFAULT_IMAGE_TITLE)).strip(),
            resize_debounce_ms=int(payload.get("resize_debounce_ms", DEFAULT_RESIZE_DEBOUNCE_MS)),
        )
        validate_settings(settings)
        return settings

    def tolerance_for_width(self, surface_width: int) -> float:
        return select_tolerance(
            surface_width,
            self.compact_width_px,
            self.touch_hit_tolerance_hours,
            self.hit_tolerance_hours,
        )


def validate_settings(settings: Settings) -> None:
    if settings.theme.value not in _SUPPORTED_THEMES:
        raise SettingsError(f"Unsupported theme: {settings.theme.value}")
    for label, value in (
        ("Hit tolerance", settings.hit_tolerance_hours),
        ("Touch hit tolerance", settings.touch_hit_tolerance_hours),
    ):
        if not (0 < value < MAX_TOLERANCE_HOURS):
            raise SettingsError(f"{label} must be between 0 and {MAX_TOLERANCE_HOURS:g} hours")
        if (value / QUARTER_HOUR) != int(value / QUARTER_HOUR):
            raise SettingsError(f"{label} must be a multiple of 15 minutes")
    if settings.compact_width_px < 0:
        raise SettingsError("Compact width must be zero or greater")
    if not (0 <= settings.resize_debounce_ms <= MAX_RESIZE_DEBOUNCE_MS):
        raise SettingsError(f"Resize debounce must be between 0 and {MAX_RESIZE_DEBOUNCE_MS} ms")
    if not settings.image_title:
        raise SettingsError("Image title must not be empty")


class SettingsManager:
    def __init__(self, path: Path | None = None, logger: logging.Logger | None = None) -> None:
        if path is None:
            ensure_app_structure()
        self._path = Path(path) if path is not None else settings_path()
        self._logger = logger or logging.getLogger("timedial.settings")

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Settings:
        if not self._path.exists():
            self._logger.info(
                "Settings file missing; using defaults",
                extra={"event": "settings_load_default", "path": str(self._path)},
            )
            return Settings()

        try:
            with self._path.open("r", encoding="utf-8") as infile:
                payload = json.load(infile)
        except json.JSONDecodeError as exc:
            self._logger.exception(
                "Invalid JSON in settings file",
                extra={"event": "settings_load_invalid_json"},
            )
            raise SettingsError("Settings file is malformed") from exc
        except Exception as exc:
            self._logger.exception("Unexpected error loading settings")
            raise SettingsError("Unable to load settings") from exc

        if not isinstance(payload, dict):
            raise SettingsError("Settings payload is invalid")

        try:
            settings = Settings.from_dict(payload)
        except SettingsError:
            raise
        except Exception as exc:
            self._logger.exception(
                "Settings payload invalid",
                extra={"event": "settings_load_invalid_payload"},
            )
            raise SettingsError("Settings payload is invalid") from exc

        self._logger.info(
            "Settings loaded successfully",
            extra={"event": "settings_loaded", **settings.to_dict()},
        )
        return settings

    def save(self, settings: Settings) -> None:
        self._logger.info("Saving settings", extra={"event": "settings_save", **settings.to_dict()})
        validate_settings(settings)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._path.with_suffix(".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as outfile:
                json.dump(settings.to_dict(), outfile, indent=2)
                outfile.flush()
                os.fsync(outfile.fileno())
            temp_path.replace(self._path)
        except Exception as exc:
            self._logger.exception("Failed to save settings")
            raise SettingsError("Unable to save settings") from exc
