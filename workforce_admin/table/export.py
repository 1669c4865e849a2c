from __future__ import annotations

import csv
import io
import json
import logging
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from .columns import PLACEHOLDER, ColumnDef, is_sequence_value, read_cell, stringify

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "export"
_UNSAFE_FILENAME = re.compile(r"[\\/:*?\"<>|\x00-\x1f]+")


def _sequence_item(item: Any) -> str:
    if isinstance(item, Mapping):
        return json.dumps(item, default=str, separators=(",", ":"))
    return stringify(item)


def csv_cell(value: Any) -> str:
    try:
        if is_sequence_value(value):
            return ", ".join(_sequence_item(item) for item in value)
        return stringify(value)
    except Exception:
        logger.warning("csv_cell_unserializable", extra={"value_type": type(value).__name__})
        return PLACEHOLDER


def build_csv(rows: Sequence[Any], columns: Sequence[ColumnDef]) -> str:
    """Header row plus one quoted row per entry of ``rows``."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([column.header for column in columns])
    for row in rows:
        writer.writerow([csv_cell(read_cell(row, column.accessor)) for column in columns])
    return buffer.getvalue()


def csv_bytes(rows: Sequence[Any], columns: Sequence[ColumnDef]) -> bytes:
    return build_csv(rows, columns).encode("utf-8")


def export_filename(title: str | None) -> str:
    stem = _UNSAFE_FILENAME.sub("_", (title or "").strip()).strip("._ ")
    return f"{stem or DEFAULT_EXPORT_NAME}.csv"


def export_csv(
    rows: Sequence[Any],
    columns: Sequence[ColumnDef],
    *,
    title: str | None = None,
    output_dir: str | Path = "exports",
) -> Path:
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)
    path = destination / export_filename(title)
    path.write_bytes(csv_bytes(rows, columns))
    return path


__all__ = ["DEFAULT_EXPORT_NAME", "build_csv", "csv_bytes", "csv_cell", "export_csv", "export_filename"]
