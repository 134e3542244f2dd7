"""Serialize a snapshot of the dial's ranges to CSV, JSON, JSONL or Excel."""

from __future__ import annotations

import csv
import io
import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Sequence

import portalocker

from .exceptions import ExportError
from .models import TimeRange

LOGGER = logging.getLogger("timedial.exporter")

# portalocker retries a non-blocking lock until ``lock_timeout`` and then raises AlreadyLocked.
_LOCK_FLAGS = portalocker.LockFlags.EXCLUSIVE | portalocker.LockFlags.NON_BLOCKING

EXPORT_FILENAME_PREFIX = "timer-schedule"
EXPORT_COLUMNS = [
    "index",
    "start",
    "end",
    "start_hour",
    "end_hour",
    "duration_hours",
    "wraps_midnight",
]


class ExportFormat(Enum):
    CSV = "csv"
    JSONL = "jsonl"
    JSON = "json"
    EXCEL = "excel"

    @property
    def suffix(self) -> str:
        if self is ExportFormat.EXCEL:
            return ".xlsx"
        return f".{self.value}"


@dataclass
class ExportTable:
    columns: list[str]
    rows: list[dict[str, object]]


def build_export_table(ranges: Sequence[TimeRange]) -> ExportTable:
    rows: list[dict[str, object]] = []
    for index, time_range in enumerate(ranges, start=1):
        row: dict[str, object] = {"index": index, **time_range.to_json_dict()}
        row["duration_hours"] = time_range.duration
        row["wraps_midnight"] = time_range.wraps_midnight
        rows.append(row)
    return ExportTable(columns=list(EXPORT_COLUMNS), rows=rows)


def default_export_filename(suffix: str, now: datetime | None = None) -> str:
    """Name exports after the moment they were taken, e.g. ``timer-schedule-1700000000000.csv``."""
    moment = now or datetime.now()
    stamp = int(moment.timestamp() * 1000)
    return f"{EXPORT_FILENAME_PREFIX}-{stamp}{suffix}"


def export_ranges(
    ranges: Sequence[TimeRange],
    fmt: ExportFormat,
    directory: Path,
    now: datetime | None = None,
    lock_timeout: float = 10.0,
) -> Path:
    """Write ``ranges`` into ``directory`` and return the created file path."""
    snapshot = tuple(ranges)
    if not snapshot:
        raise ExportError("No time ranges to export")
    path = Path(directory).expanduser() / default_export_filename(fmt.suffix, now)
    write_export(build_export_table(snapshot), fmt, path, lock_timeout=lock_timeout)
    return path


def write_export(table: ExportTable, fmt: ExportFormat, path: Path, lock_timeout: float = 10.0) -> None:
    LOGGER.info(
        "Writing export",
        extra={"event": "export_write", "format": fmt.value, "path": str(path), "rows": len(table.rows)},
    )
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if fmt is ExportFormat.EXCEL:
            _write_excel(table, path, lock_timeout)
            return
        with portalocker.Lock(
            path,
            mode="w",
            timeout=lock_timeout,
            flags=_LOCK_FLAGS,
            encoding="utf-8",
            newline="" if fmt is ExportFormat.CSV else None,
        ) as handle:
            if fmt is ExportFormat.CSV:
                _write_csv(table, handle)
            elif fmt is ExportFormat.JSON:
                _write_json(table, handle)
            elif fmt is ExportFormat.JSONL:
                _write_jsonl(table, handle)
            else:
                raise ValueError(f"Unsupported export format: {fmt}")
            handle.flush()
            os.fsync(handle.fileno())
    except ExportError:
        raise
    except Exception as exc:
        LOGGER.exception("Export failed", extra={"event": "export_failed", "path": str(path)})
        raise ExportError(f"Unable to export time ranges to {path}") from exc


# ---------------------------------------------------------------------------
# Writers

def _write_csv(table: ExportTable, handle) -> None:
    writer = csv.DictWriter(handle, fieldnames=table.columns)
    writer.writeheader()
    for row in table.rows:
        writer.writerow({column: row.get(column, "") for column in table.columns})


def _write_json(table: ExportTable, handle) -> None:
    payload = {
        "columns": table.columns,
        "rows": table.rows,
        "count": len(table.rows),
    }
    json.dump(payload, handle, indent=2, ensure_ascii=False)
    handle.write("\n")


def _write_jsonl(table: ExportTable, handle) -> None:
    for row in table.rows:
        handle.write(json.dumps(row, ensure_ascii=False))
        handle.write("\n")


def _write_excel(table: ExportTable, path: Path, lock_timeout: float) -> None:
    from openpyxl import Workbook  # type: ignore[import]
    from openpyxl.utils import get_column_letter  # type: ignore[import]

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Ranges"

    sheet.append(table.columns)
    for row in table.rows:
        sheet.append([row.get(column, "") for column in table.columns])

    for index, column_name in enumerate(table.columns, start=1):
        max_length = len(str(column_name))
        for row in table.rows:
            max_length = max(max_length, len(str(row.get(column_name, ""))))
        sheet.column_dimensions[get_column_letter(index)].width = max(10, min(max_length + 2, 60))

    metadata = workbook.create_sheet("Metadata")
    metadata.append(["Exported", datetime.now().isoformat(timespec="seconds")])
    metadata.append(["Rows", len(table.rows)])

    buffer = io.BytesIO()
    workbook.save(buffer)
    with portalocker.Lock(
        path,
        mode="wb",
        timeout=lock_timeout,
        flags=_LOCK_FLAGS,
    ) as handle:
        handle.write(buffer.getvalue())
        handle.flush()
        os.fsync(handle.fileno())
